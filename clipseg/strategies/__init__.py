"""Segmentation strategies."""

from .base import SegmentationStrategy
from .chinese import ChineseStrategy, DictionaryWordStrategy
from .code import IdentifierStrategy
from .english import EnglishStrategy
from .listing import ListItemStrategy
from .mixed import MixedLanguageStrategy
from .url import UrlStrategy, classify_url
from .wrapped import PunctuationStrategy, WrappedContentStrategy

__all__ = [
    "SegmentationStrategy",
    "ChineseStrategy",
    "DictionaryWordStrategy",
    "IdentifierStrategy",
    "EnglishStrategy",
    "ListItemStrategy",
    "MixedLanguageStrategy",
    "UrlStrategy",
    "PunctuationStrategy",
    "WrappedContentStrategy",
    "classify_url",
]
