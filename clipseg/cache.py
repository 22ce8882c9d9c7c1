"""Bounded cache of segmentation results."""

import logging
from collections import OrderedDict

from .config import SegmentationOptions

logger = logging.getLogger(__name__)

HASHED_PREFIX_CHARS = 1000
BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])
    return sign + "".join(reversed(digits))


def hash_text(text: str) -> str:
    """Rolling 32-bit hash (h * 31 + code) of the first 1000 characters, in base 36."""
    h = 0
    for char in text[:HASHED_PREFIX_CHARS]:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return _to_base36(h)


class SegmentationCache:
    """Insertion-ordered cache; the oldest insert is evicted first.

    Reads do not refresh an entry's position. Each entry keeps the text it was
    computed from, and a lookup whose text differs from the stored one is a
    miss, so two texts sharing a key never see each other's segments. Values
    are stored as tuples and handed out as fresh lists so callers cannot
    mutate a cached result.
    """

    def __init__(self):
        self._entries: OrderedDict[str, tuple[str, tuple[str, ...]]] = OrderedDict()

    @staticmethod
    def make_key(text: str, options: SegmentationOptions) -> str:
        return f"{hash_text(text)}:{options.cache_signature()}"

    def get(self, text: str, options: SegmentationOptions) -> list[str] | None:
        """Return the cached segments for text and options, or None on a miss."""
        key = self.make_key(text, options)
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_text, segments = entry
        if stored_text != text:
            logger.debug(f"Cache key {key.split(':', 1)[0]} belongs to another text")
            return None
        logger.debug(f"Cache hit ({len(segments)} segments)")
        return list(segments)

    def put(self, text: str, options: SegmentationOptions, segments: list[str]) -> None:
        """Store a result and evict the oldest entries beyond the size cap.

        Storing the same text again keeps the first value and only marks the
        key as newest. Storing a different text under an occupied key replaces
        the entry and marks it as newest.
        """
        key = self.make_key(text, options)
        entry = self._entries.get(key)
        if entry is not None and entry[0] == text:
            self._entries.move_to_end(key)
        else:
            self._entries[key] = (text, tuple(segments))
            self._entries.move_to_end(key)

        while len(self._entries) > options.max_cache_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cache entry {evicted.split(':', 1)[0]}")

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
