"""Latin sentence splitting."""

import re

from ..models import StrategyContext
from .base import LATIN_CLAUSE_SEPARATOR, LATIN_SENTENCE, SegmentationStrategy

# Letters, digits, horizontal whitespace and Latin punctuation
LATIN_RUN = re.compile(r"[A-Za-z0-9 \t,.!?;:()\"'<>\[\]{}]+")

LONG_SENTENCE_CHARS = 100


def split_english_sentences(text: str) -> list[str]:
    """Split Latin text into sentences that keep their terminator.

    Sentences longer than 100 characters are split again at ``", "``.
    """
    results = []
    for match in LATIN_SENTENCE.finditer(text):
        sentence = match.group(0).strip()
        if not sentence:
            continue
        if len(sentence) > LONG_SENTENCE_CHARS:
            results.extend(part for part in LATIN_CLAUSE_SEPARATOR.split(sentence) if part)
        else:
            results.append(sentence)
    return results


class EnglishStrategy(SegmentationStrategy):
    """Sentence-level segmentation of the Latin runs in a text."""

    name = "english"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        for match in LATIN_RUN.finditer(text):
            run = match.group(0).strip()
            if run:
                results.extend(split_english_sentences(run))
        return results
