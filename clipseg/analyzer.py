"""Composite classification of clipboard snapshots."""

import logging

from .config import AnalyzerConfig
from .models import AnalysisReport, ReportType
from .pipeline import Segmenter
from .utils.detectors import (
    categorize_links,
    code_indicator_count,
    count_scripts,
    extract_emails,
    extract_formats,
    extract_links,
    extract_paths,
    extract_phone_numbers,
    looks_like_table,
)

logger = logging.getLogger(__name__)

LINKS_CONFIDENCE = 0.8
CODE_CONFIDENCE = 0.8
PATHS_CONFIDENCE = 0.7
TABLE_CONFIDENCE = 0.7
TEXT_CONFIDENCE = 0.7
MIN_CODE_INDICATORS = 3


class ClipboardContentAnalyzer:
    """Runs the detectors and the segmenter over one clipboard text."""

    def __init__(self, segmenter: Segmenter, config: AnalyzerConfig | None = None):
        self.segmenter = segmenter
        self.config = config or AnalyzerConfig()

    async def analyze(self, text: str) -> AnalysisReport:
        """Build an AnalysisReport for text.

        The type is decided by fixed-confidence detectors: links (0.8), code
        (0.8), paths (0.7) and table (0.7), each applied only if nothing with
        a higher confidence was found, then by the dominant script.

        Args:
            text: Clipboard text

        Returns:
            Report with type, confidence, detector flags, links, segments and
            structured data
        """
        if not isinstance(text, str) or not text.strip():
            return AnalysisReport(type=ReportType.EMPTY, confidence=1.0)

        report = AnalysisReport()
        details = report.details

        links = extract_links(text)
        if links:
            details.has_links = True
            report.type = ReportType.LINKS
            report.confidence = LINKS_CONFIDENCE
            report.links = links
            report.structured_data["links"] = links
            report.structured_data["linkCategories"] = categorize_links(links)

        if extract_paths(text):
            details.has_paths = True
            self._promote(report, ReportType.PATHS, PATHS_CONFIDENCE)

        details.has_emails = bool(extract_emails(text))
        details.has_phones = bool(extract_phone_numbers(text))

        if code_indicator_count(text) >= MIN_CODE_INDICATORS:
            details.has_code = True
            self._promote(report, ReportType.CODE, CODE_CONFIDENCE)

        if looks_like_table(text):
            details.has_table = True
            self._promote(report, ReportType.TABLE, TABLE_CONFIDENCE)

        cjk_count, latin_count = count_scripts(text)
        details.has_chinese = cjk_count > 0
        details.has_english = latin_count > 0

        if report.type == ReportType.UNKNOWN:
            if cjk_count > latin_count:
                report.type = ReportType.CHINESE_TEXT
                report.confidence = TEXT_CONFIDENCE
            elif latin_count > 0:
                report.type = ReportType.ENGLISH_TEXT
                report.confidence = TEXT_CONFIDENCE

        report.segments = await self._segment(text)

        report.structured_data.update(
            {
                "segments": report.segments,
                "contentType": report.type.value,
                "confidence": report.confidence,
                "details": details.to_dict(),
                "length": len(text),
                "lineCount": len(text.split("\n")),
                "formats": extract_formats(text),
            }
        )
        return report

    @staticmethod
    def _promote(report: AnalysisReport, report_type: ReportType, confidence: float) -> None:
        if report.confidence < confidence:
            report.type = report_type
            report.confidence = confidence

    async def _segment(self, text: str) -> list[str]:
        threshold = self.config.offload_threshold
        offload_allowed = self.segmenter.config.segmentation.offload_enabled
        options = {
            "offload_enabled": len(text) > threshold and offload_allowed,
            "offload_threshold": threshold,
        }
        try:
            return await self.segmenter.segment(text, options)
        except Exception:
            logger.exception("Segmentation failed during clipboard analysis")
            return []
