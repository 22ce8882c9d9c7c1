"""Tests for clipboard content analysis."""

import asyncio

import pytest

from clipseg.analyzer import ClipboardContentAnalyzer
from clipseg.config import AnalyzerConfig, Config, OffloadConfig, SegmentationOptions
from clipseg.models import ReportType
from clipseg.pipeline import Segmenter


@pytest.fixture
def analyzer():
    segmenter = Segmenter(Config(offload=OffloadConfig(executor="thread")))
    yield ClipboardContentAnalyzer(segmenter)
    segmenter.close()


def analyze(analyzer, text):
    return asyncio.run(analyzer.analyze(text))


class BrokenSegmenter:
    config = Config()

    async def segment(self, text, options=None):
        raise RuntimeError("segmenter down")


class RecordingSegmenter:
    def __init__(self, config=None):
        self.config = config or Config()
        self.calls = []

    async def segment(self, text, options=None):
        self.calls.append(options)
        return ["recorded"]


class TestClipboardContentAnalyzer:
    """Tests for ClipboardContentAnalyzer.analyze."""

    @pytest.mark.parametrize("text", ["", "  \n ", None])
    def test_empty(self, analyzer, text):
        """Blank input is reported as empty with full confidence."""
        report = analyze(analyzer, text)
        assert report.type == ReportType.EMPTY
        assert report.confidence == 1.0
        assert report.segments == []

    def test_links(self, analyzer):
        """Links win with confidence 0.8 and are categorised."""
        report = analyze(analyzer, "Read https://github.com/foo/bar and https://www.youtube.com/watch?v=1")
        assert report.type == ReportType.LINKS
        assert report.confidence == 0.8
        assert report.details.has_links
        assert report.links == ["https://github.com/foo/bar", "https://www.youtube.com/watch?v=1"]
        assert report.structured_data["linkCategories"] == {
            "github": ["https://github.com/foo/bar"],
            "video": ["https://www.youtube.com/watch?v=1"],
        }

    def test_code(self, analyzer):
        """Three or more code keywords make the text code."""
        report = analyze(analyzer, "def main():\n    import os\n    return print(os)")
        assert report.type == ReportType.CODE
        assert report.confidence == 0.8
        assert report.details.has_code

    def test_two_keywords_are_not_code(self, analyzer):
        """Two keywords are not enough."""
        report = analyze(analyzer, "if you return early")
        assert report.type == ReportType.ENGLISH_TEXT
        assert not report.details.has_code

    def test_paths(self, analyzer):
        """A file path gives paths with confidence 0.7."""
        report = analyze(analyzer, "Open C:\\Users\\me\\file.txt please")
        assert report.type == ReportType.PATHS
        assert report.confidence == 0.7
        assert report.details.has_paths

    def test_code_beats_paths(self, analyzer):
        """Code outranks paths."""
        report = analyze(analyzer, "import os\nfor f in os.listdir('/home/me/src'):\n    print(f)")
        assert report.type == ReportType.CODE
        assert report.details.has_paths

    def test_links_keep_priority_over_code(self, analyzer):
        """Code at equal confidence does not replace links."""
        report = analyze(analyzer, "import requests; for url in ['https://example.com']: print(url)")
        assert report.type == ReportType.LINKS
        assert report.details.has_code

    def test_table(self, analyzer):
        """Tab separated text is a table."""
        report = analyze(analyzer, "name\tage\nbob\t42")
        assert report.type == ReportType.TABLE
        assert report.confidence == 0.7

    def test_paths_keep_priority_over_table(self, analyzer):
        """Table does not replace paths at equal confidence."""
        report = analyze(analyzer, "file\t/home/me/a.txt")
        assert report.type == ReportType.PATHS
        assert report.details.has_table

    def test_chinese_text(self, analyzer):
        """CJK-dominant text is chinese_text."""
        report = analyze(analyzer, "今天天气很好。我们去公园吧！")
        assert report.type == ReportType.CHINESE_TEXT
        assert report.confidence == 0.7
        assert report.details.has_chinese
        assert not report.details.has_english
        assert report.segments == ["今天天气很好", "我们去公园吧"]

    def test_english_text(self, analyzer):
        """Latin text is english_text and gets segmented."""
        report = analyze(analyzer, "Hello world. This is a test!")
        assert report.type == ReportType.ENGLISH_TEXT
        assert report.segments == ["Hello world.", "This is a test!"]

    def test_unknown(self, analyzer):
        """Text with no letters stays unknown."""
        report = analyze(analyzer, "12345 67890")
        assert report.type == ReportType.UNKNOWN
        assert report.confidence == 0.5

    def test_contact_flags(self, analyzer):
        """Emails and phone numbers set flags without changing the type."""
        report = analyze(analyzer, "Mail bob@example.com or call 13812345678")
        assert report.details.has_emails
        assert report.details.has_phones
        assert report.type == ReportType.ENGLISH_TEXT

    def test_structured_data(self, analyzer):
        """Structured data mirrors the report and adds size information."""
        text = "Hello world.\nSecond line"
        report = analyze(analyzer, text)
        data = report.structured_data
        assert data["contentType"] == "english_text"
        assert data["confidence"] == 0.7
        assert data["segments"] == report.segments
        assert data["details"]["hasEnglish"] is True
        assert data["length"] == len(text)
        assert data["lineCount"] == 2
        assert data["formats"] == []

    def test_to_dict(self, analyzer):
        """Reports serialise with camelCase keys."""
        result = analyze(analyzer, "Hello world.").to_dict()
        assert set(result) == {"type", "confidence", "details", "links", "segments", "structuredData"}
        assert result["type"] == "english_text"

    def test_segmenter_failure(self):
        """A failing segmenter leaves segments empty."""
        report = asyncio.run(ClipboardContentAnalyzer(BrokenSegmenter()).analyze("Hello world."))
        assert report.segments == []
        assert report.type == ReportType.ENGLISH_TEXT

    def test_offload_above_threshold(self):
        """Segmentation is offloaded only for text longer than the threshold."""
        segmenter = RecordingSegmenter()
        analyzer = ClipboardContentAnalyzer(segmenter, AnalyzerConfig(offload_threshold=10))
        asyncio.run(analyzer.analyze("short"))
        asyncio.run(analyzer.analyze("a much longer text"))
        assert [call["offload_enabled"] for call in segmenter.calls] == [False, True]
        assert all(call["offload_threshold"] == 10 for call in segmenter.calls)

    def test_offload_disabled_in_segmenter_config(self):
        """Long text is not offloaded when the segmenter's options disable offload."""
        config = Config(segmentation=SegmentationOptions(offload_enabled=False))
        segmenter = RecordingSegmenter(config)
        analyzer = ClipboardContentAnalyzer(segmenter, AnalyzerConfig(offload_threshold=10))
        asyncio.run(analyzer.analyze("a much longer text"))
        assert segmenter.calls[0]["offload_enabled"] is False
