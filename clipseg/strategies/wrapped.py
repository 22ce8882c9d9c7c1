"""Wrapped-content extraction and punctuation splitting."""

import re

from ..models import StrategyContext
from .base import WRAPPER_PAIRS, SegmentationStrategy

PUNCTUATION_SEPARATOR = re.compile(r"[,.!?;:，。！？；：、]")

WRAPPER_PATTERNS = tuple(
    re.compile(f"{re.escape(open_)}([^{re.escape(close)}]*){re.escape(close)}")
    for open_, close in WRAPPER_PAIRS
)


def split_by_punctuation(text: str) -> list[str]:
    """Split on Latin and Chinese punctuation, dropping empty parts."""
    parts = (part.strip() for part in PUNCTUATION_SEPARATOR.split(text))
    return [part for part in parts if part]


class PunctuationStrategy(SegmentationStrategy):
    """Splits text at every punctuation mark."""

    name = "punctuation"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        return split_by_punctuation(text)


class WrappedContentStrategy(SegmentationStrategy):
    """Pulls out text enclosed in quotes and brackets.

    Wrapper pairs are processed in a fixed order; each extracted span is
    blanked out of the text before the next pair is tried, and whatever is
    left at the end is split by punctuation.
    """

    name = "wrapped"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        remaining = text
        for pattern in WRAPPER_PATTERNS:
            for match in pattern.finditer(remaining):
                content = match.group(1).strip()
                if content:
                    results.append(content)
            remaining = pattern.sub(" ", remaining)

        leftover = remaining.strip()
        if leftover:
            results.extend(split_by_punctuation(leftover))
        return results
