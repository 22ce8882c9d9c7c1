"""End-to-end tests for the segmenter."""

import asyncio
import logging

import pytest

from clipseg.cache import SegmentationCache
from clipseg.config import Config, OffloadConfig, SegmentationOptions
from clipseg.offload import OffloadScheduler
from clipseg.pipeline import Segmenter, segment_with_strategies
from clipseg.registry import StrategyRegistry

SAMPLES = [
    "Hello world. This is a test!",
    "1. First item\n2. Second item",
    "getUserNameHTTPRequest and user_name",
    "https://github.com/foo/bar?x=1",
    "今天天气很好。我们去公园吧！",
    "我喜欢Python编程。It is fun, really fun!",
    "他说“你好”，然后走了。",
    "   padded   text   with   spaces   ",
    "的 a 了 b 是",
    "x" * 450 + ". " + "中" * 300,
]


class CountingCache(SegmentationCache):
    """Cache that records how often it is consulted."""

    def __init__(self):
        super().__init__()
        self.gets = 0
        self.puts = 0

    def get(self, text, options):
        self.gets += 1
        return super().get(text, options)

    def put(self, text, options, segments):
        self.puts += 1
        super().put(text, options, segments)


class FailingStrategy:
    name = "failing"

    def segment(self, text, context):
        raise ValueError("strategy exploded")


def thread_segmenter(**kwargs) -> Segmenter:
    config = Config(offload=OffloadConfig(executor="thread"))
    return Segmenter(config, scheduler=OffloadScheduler(config.offload), **kwargs)


class TestSegmenter:
    """Tests for Segmenter.segment."""

    def test_english_sentences(self):
        """Default options split English text into sentences."""
        segmenter = Segmenter()
        result = asyncio.run(segmenter.segment("Hello world. This is a test!"))
        assert result == ["Hello world.", "This is a test!"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t  ", None, 42])
    def test_blank_input_skips_cache(self, text):
        """Blank or non-string input returns [] without touching the cache."""
        cache = CountingCache()
        segmenter = Segmenter(cache=cache)
        assert asyncio.run(segmenter.segment(text)) == []
        assert cache.gets == 0
        assert cache.puts == 0

    def test_idempotent_through_cache(self):
        """A cache hit reproduces the cache-miss result exactly."""
        cache = CountingCache()
        segmenter = Segmenter(cache=cache)
        text = "我喜欢Python编程。It is fun, really fun!"

        first = asyncio.run(segmenter.segment(text))
        second = asyncio.run(segmenter.segment(text))

        assert first == second
        assert cache.puts == 1
        assert len(cache) == 1

    def test_cache_disabled(self):
        """cache_enabled=False neither reads nor writes the cache."""
        cache = CountingCache()
        segmenter = Segmenter(cache=cache)
        asyncio.run(segmenter.segment("Hello world.", {"cache_enabled": False}))
        assert cache.gets == 0
        assert cache.puts == 0

    def test_colliding_texts_segmented_independently(self):
        """A text whose hash collides with a cached one is segmented afresh."""
        segmenter = Segmenter()
        assert asyncio.run(segmenter.segment("Aa")) == ["Aa"]
        assert asyncio.run(segmenter.segment("BB")) == asyncio.run(Segmenter().segment("BB"))
        assert asyncio.run(segmenter.segment("BB")) == ["BB"]

    @pytest.mark.parametrize("text", SAMPLES)
    def test_segment_invariants(self, text):
        """Every segment is trimmed and 1 to 200 characters long."""
        segmenter = Segmenter()
        for segment in asyncio.run(segmenter.segment(text, {"offload_enabled": False})):
            assert segment == segment.strip()
            assert 1 <= len(segment) <= 200

    def test_options_mapping(self):
        """A mapping of overrides is merged onto the configured options."""
        segmenter = Segmenter()
        result = asyncio.run(
            segmenter.segment("https://github.com/foo/bar", {"selected_plugins": "english"})
        )
        assert "github" not in result

    def test_strategy_failure_is_isolated(self, caplog):
        """A failing strategy contributes nothing while the others still run."""
        registry = StrategyRegistry.with_defaults()
        registry.register("chinese", FailingStrategy())
        segmenter = Segmenter(registry=registry)

        with caplog.at_level(logging.ERROR):
            result = asyncio.run(segmenter.segment("你好 world"))

        assert result == ["world"]
        assert "strategy exploded" in caplog.text

    def test_register_strategy_clears_cache(self):
        """Changing the strategies invalidates cached results."""
        segmenter = Segmenter()
        asyncio.run(segmenter.segment("Hello world."))
        assert len(segmenter.cache) == 1
        segmenter.register_strategy("english", FailingStrategy())
        assert len(segmenter.cache) == 0
        assert asyncio.run(segmenter.segment("Hello world.")) == []

    def test_rejected_strategy_keeps_cache(self):
        """A rejected registration leaves the cache alone."""
        segmenter = Segmenter()
        asyncio.run(segmenter.segment("Hello world."))
        assert not segmenter.register_strategy("bad", object())
        assert len(segmenter.cache) == 1


class TestOffloadEquivalence:
    """Offloading changes where segmentation runs, never its result."""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_thread_executor(self, text):
        """Thread offload matches inline segmentation."""
        segmenter = thread_segmenter()
        offloaded = SegmentationOptions(offload_enabled=True, offload_threshold=0, cache_enabled=False)
        inline = SegmentationOptions(offload_enabled=False, cache_enabled=False)
        try:
            assert asyncio.run(segmenter.segment(text, offloaded)) == asyncio.run(
                segmenter.segment(text, inline)
            )
        finally:
            segmenter.close()

    def test_process_executor(self):
        """Process offload matches inline segmentation."""
        segmenter = Segmenter()
        text = SAMPLES[-1]
        offloaded = SegmentationOptions(offload_enabled=True, offload_threshold=10, cache_enabled=False)
        inline = SegmentationOptions(offload_enabled=False, cache_enabled=False)
        try:
            assert asyncio.run(segmenter.segment(text, offloaded)) == asyncio.run(
                segmenter.segment(text, inline)
            )
        finally:
            segmenter.close()

    def test_sync_path_function(self):
        """The module-level path gives the same answer as the segmenter."""
        registry = StrategyRegistry.with_defaults()
        options = SegmentationOptions(offload_enabled=False)
        text = "Hello world. This is a test!"
        expected = asyncio.run(Segmenter(registry=registry).segment(text, options))
        assert segment_with_strategies(text, options, registry.snapshot()) == expected
