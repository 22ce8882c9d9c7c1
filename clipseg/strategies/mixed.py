"""Segmentation of text mixing Chinese and Latin script."""

import re

from ..models import StrategyContext
from .base import CJK_CHAR, CJK_RANGE, CJK_RUN_PUNCTUATION, LATIN_CHAR, SegmentationStrategy
from .chinese import split_chinese_sentences
from .english import split_english_sentences

LANGUAGE_RUN = re.compile(
    f"[{CJK_RANGE}{CJK_RUN_PUNCTUATION}]+|[A-Za-z0-9\\s,.!?;:()\"'<>\\[\\]{{}}]+"
)


class MixedLanguageStrategy(SegmentationStrategy):
    """Cuts text at language boundaries and splits each piece by its dominant script."""

    name = "mixed"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        for match in LANGUAGE_RUN.finditer(text):
            piece = match.group(0).strip()
            if not piece:
                continue
            cjk_count = len(CJK_CHAR.findall(piece))
            latin_count = len(LATIN_CHAR.findall(piece))
            if cjk_count > latin_count:
                results.extend(split_chinese_sentences(piece))
            else:
                results.extend(split_english_sentences(piece))
        return results
