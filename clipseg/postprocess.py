"""Cleanup of raw strategy output."""

import re

from .models import MAX_SEGMENT_LENGTH

# A lone function word or a lone Latin letter
MERGEABLE = re.compile(r"^[的了是在有和与或但而且然后因为所以a-zA-Z]$")


def dedupe(raw_segments: list[str]) -> list[str]:
    """Trim every item and keep the first occurrence of each non-empty one."""
    seen = set()
    result = []
    for item in raw_segments:
        if not isinstance(item, str):
            continue
        item = item.strip()
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def merge_orphans(segments: list[str]) -> list[str]:
    """Attach each orphaned function word or letter to the segment after it."""
    result = []
    index = 0
    while index < len(segments):
        current = segments[index]
        if len(current) <= 2 and MERGEABLE.match(current) and index + 1 < len(segments):
            result.append(current + segments[index + 1])
            index += 2
        else:
            result.append(current)
            index += 1
    return result


def process(raw_segments: list[str]) -> list[str]:
    """Turn concatenated strategy output into the final segment list.

    Args:
        raw_segments: Fragments in strategy order, possibly with duplicates
            and surrounding whitespace

    Returns:
        Trimmed, unique segments of 1 to 200 characters
    """
    segments = merge_orphans(dedupe(raw_segments))
    return [s for s in segments if 1 <= len(s) <= MAX_SEGMENT_LENGTH]
