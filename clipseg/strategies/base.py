"""Base class and shared patterns for segmentation strategies."""

import re
from abc import ABC, abstractmethod

from ..models import StrategyContext

# Common Chinese ideographs
CJK_RANGE = "一-龥"
CJK_CHAR = re.compile(f"[{CJK_RANGE}]")
LATIN_CHAR = re.compile(r"[A-Za-z]")

# Chinese punctuation allowed inside a CJK run
CJK_RUN_PUNCTUATION = "，。！？；：“”‘’（）【】《》"

# Sentence terminators and clause separators
CJK_SENTENCE_END = re.compile(r"[。！？；]")
CJK_CLAUSE_SEPARATOR = re.compile(r"[，、]")
LATIN_SENTENCE = re.compile(r"[^.!?]+[.!?]?")
LATIN_CLAUSE_SEPARATOR = re.compile(r",\s+")

# Single-character function words that carry no meaning on their own
FUNCTION_WORDS = frozenset("的了是在有和与或但而且然后因为所以")

# Wrapping punctuation pairs (open, close)
WRAPPER_PAIRS = (
    ("“", "”"),
    ("‘", "’"),
    ("（", "）"),
    ("(", ")"),
    ("【", "】"),
    ("[", "]"),
    ("《", "》"),
    ("<", ">"),
    ("「", "」"),
    ("『", "』"),
)

# List markers, each capturing the item text after the marker
LIST_ITEM_PATTERNS = (
    re.compile(r"^\d+[.)]\s*(.+)$"),  # 1. or 1)
    re.compile(r"^[一二三四五六七八九十]+[、.]\s*(.+)$"),  # 一、
    re.compile(r"^[①②③④⑤⑥⑦⑧⑨⑩]\s*(.+)$"),  # ①
    re.compile(r"^[a-zA-Z][.)]\s*(.+)$"),  # a. or a)
    re.compile(r"^[-*•·]\s*(.+)$"),  # bullets
    re.compile(r"^[▪▫◦‣⁃]\s*(.+)$"),  # other bullet glyphs
)


class SegmentationStrategy(ABC):
    """Base class for segmentation strategies.

    A strategy turns raw text into an ordered list of raw fragments.
    Fragments may still contain duplicates or surrounding whitespace; the
    post-processor cleans them up.
    """

    name: str = "base"

    @abstractmethod
    def segment(self, text: str, context: StrategyContext) -> list[str]:
        """Segment text into raw fragments.

        Args:
            text: Input text to segment
            context: Content type of the text and the call options

        Returns:
            Ordered list of fragments
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
