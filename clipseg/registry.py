"""Runtime registry of segmentation strategies."""

import logging
from collections.abc import Iterable

from .models import ContentType
from .strategies import (
    ChineseStrategy,
    DictionaryWordStrategy,
    EnglishStrategy,
    IdentifierStrategy,
    ListItemStrategy,
    MixedLanguageStrategy,
    PunctuationStrategy,
    SegmentationStrategy,
    UrlStrategy,
    WrappedContentStrategy,
)

logger = logging.getLogger(__name__)

# Recommended strategies per content type, in execution order
RECOMMENDED_PLUGINS: dict[ContentType, tuple[str, ...]] = {
    ContentType.URL: ("url", "english"),
    ContentType.CODE: ("code", "english"),
    ContentType.LIST: ("list", "chinese", "english"),
    ContentType.WRAPPED: ("wrapped", "chinese", "english"),
    ContentType.CHINESE: ("chinese", "english"),
    ContentType.ENGLISH: ("english",),
    ContentType.MIXED: ("chinese", "english"),
    ContentType.UNKNOWN: ("chinese", "english"),
}


def select_plugins(content_type: ContentType, allowed: Iterable[str]) -> list[str]:
    """Resolve a content type to the strategy names to run.

    Args:
        content_type: Classified type of the input
        allowed: Strategy names the caller permits

    Returns:
        Recommended names that are also allowed, in recommended order
    """
    allowed = set(allowed)
    recommended = RECOMMENDED_PLUGINS.get(content_type, RECOMMENDED_PLUGINS[ContentType.UNKNOWN])
    return [name for name in recommended if name in allowed]


class StrategyRegistry:
    """Ordered mapping from strategy name to strategy instance."""

    def __init__(self):
        self._strategies: dict[str, SegmentationStrategy] = {}

    @classmethod
    def with_defaults(cls) -> "StrategyRegistry":
        """Create a registry holding every built-in strategy."""
        registry = cls()
        for strategy in (
            ChineseStrategy(),
            EnglishStrategy(),
            UrlStrategy(),
            IdentifierStrategy(),
            ListItemStrategy(),
            WrappedContentStrategy(),
            PunctuationStrategy(),
            DictionaryWordStrategy(),
            MixedLanguageStrategy(),
        ):
            registry.register(strategy.name, strategy)
        return registry

    def register(self, name: str, strategy) -> bool:
        """Add or replace a strategy.

        Objects without a callable ``segment`` are rejected and logged.

        Returns:
            True if the strategy was registered
        """
        if not callable(getattr(strategy, "segment", None)):
            logger.error(f"Rejected strategy {name!r}: it has no callable segment()")
            return False
        if name in self._strategies:
            logger.info(f"Replacing strategy {name!r}")
        else:
            logger.info(f"Registered strategy {name!r}")
        self._strategies[name] = strategy
        return True

    def remove(self, name: str) -> bool:
        """Remove a strategy; returns False if it was not registered."""
        if self._strategies.pop(name, None) is None:
            return False
        logger.info(f"Removed strategy {name!r}")
        return True

    def get(self, name: str):
        return self._strategies.get(name)

    def names(self) -> list[str]:
        return list(self._strategies)

    def snapshot(self) -> dict[str, SegmentationStrategy]:
        """Shallow copy of the current mapping, safe to send to a worker."""
        return dict(self._strategies)

    def __contains__(self, name: str) -> bool:
        return name in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)
