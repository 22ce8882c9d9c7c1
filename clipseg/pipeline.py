"""Segmenter orchestrating classification, strategies, caching and offload."""

import functools
import logging
from collections.abc import Mapping
from typing import Any

from .cache import SegmentationCache
from .classifier import classify
from .config import Config, SegmentationOptions
from .models import StrategyContext
from .offload import OffloadScheduler
from .postprocess import process
from .registry import StrategyRegistry, select_plugins

logger = logging.getLogger(__name__)


def segment_with_strategies(
    text: str, options: SegmentationOptions, strategies: Mapping[str, Any]
) -> list[str]:
    """Classify text, run the selected strategies and post-process their output.

    This is the whole synchronous path. It is module-level so it can be
    pickled and sent to a worker process together with its arguments.

    Args:
        text: Non-empty input text
        options: Call options
        strategies: Strategy name to strategy instance

    Returns:
        Final segment list
    """
    content_type = classify(text)
    names = select_plugins(content_type, options.selected_plugins)
    logger.debug(f"Content type {content_type.value}, strategies {names}")

    context = StrategyContext(content_type=content_type, options=options.model_dump())
    raw_segments = []
    for name in names:
        strategy = strategies.get(name)
        if strategy is None:
            continue
        try:
            raw_segments.extend(strategy.segment(text, context))
        except Exception:
            logger.exception(f"Strategy {name!r} failed; skipping its output")
    return process(raw_segments)


class Segmenter:
    """Public entry point for segmentation.

    One instance owns one registry, one cache and one offload scheduler;
    construct it once and pass it to whatever needs segmentation.
    """

    def __init__(
        self,
        config: Config | None = None,
        registry: StrategyRegistry | None = None,
        cache: SegmentationCache | None = None,
        scheduler: OffloadScheduler | None = None,
    ):
        """Initialize the segmenter.

        Args:
            config: Configuration; defaults are used when omitted
            registry: Strategy registry, defaults to every built-in strategy
            cache: Result cache
            scheduler: Offload scheduler, built from ``config.offload`` when omitted
        """
        self.config = config or Config()
        self.registry = registry if registry is not None else StrategyRegistry.with_defaults()
        self.cache = cache if cache is not None else SegmentationCache()
        self.scheduler = scheduler or OffloadScheduler(self.config.offload)

    def resolve_options(
        self, options: SegmentationOptions | Mapping[str, Any] | None
    ) -> SegmentationOptions:
        """Merge per-call overrides onto the configured defaults."""
        if options is None:
            return self.config.segmentation
        if isinstance(options, SegmentationOptions):
            return options
        return SegmentationOptions(**{**self.config.segmentation.model_dump(), **options})

    async def segment(
        self, text: str, options: SegmentationOptions | Mapping[str, Any] | None = None
    ) -> list[str]:
        """Segment text.

        Blank or non-string input returns an empty list without touching
        the cache. Errors inside strategies or the worker never propagate.

        Args:
            text: Input text
            options: Options or a mapping of overrides

        Returns:
            Ordered list of trimmed segments, 1 to 200 characters each
        """
        if not isinstance(text, str) or not text.strip():
            return []

        options = self.resolve_options(options)
        if options.cache_enabled:
            cached = self.cache.get(text, options)
            if cached is not None:
                return cached

        run = functools.partial(
            segment_with_strategies, options=options, strategies=self.registry.snapshot()
        )
        segments = await self.scheduler.run(text, options, run)

        if options.cache_enabled:
            self.cache.put(text, options, segments)
        return segments

    def register_strategy(self, name: str, strategy) -> bool:
        """Register a strategy; cached results are dropped on success."""
        registered = self.registry.register(name, strategy)
        if registered:
            self.cache.clear()
        return registered

    def remove_strategy(self, name: str) -> bool:
        removed = self.registry.remove(name)
        if removed:
            self.cache.clear()
        return removed

    def get_strategy(self, name: str):
        return self.registry.get(name)

    def clear_cache(self) -> None:
        self.cache.clear()

    def close(self) -> None:
        """Shut down the background executor."""
        self.scheduler.shutdown()
