"""List item extraction."""

import re

from ..models import StrategyContext
from .base import LIST_ITEM_PATTERNS, SegmentationStrategy

LINE_BREAK = re.compile(r"\r?\n")


def strip_list_marker(line: str) -> str:
    """Return the item text of a list line, or the line itself if it has no marker."""
    for pattern in LIST_ITEM_PATTERNS:
        match = pattern.match(line)
        if match:
            return match.group(1).strip()
    return line


class ListItemStrategy(SegmentationStrategy):
    """One segment per non-blank line, without its list marker."""

    name = "list"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        for line in LINE_BREAK.split(text):
            line = line.strip()
            if line:
                results.append(strip_list_marker(line))
        return results
