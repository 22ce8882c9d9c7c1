"""Heuristic content type detection."""

import re

from .models import ContentType
from .strategies.base import WRAPPER_PAIRS
from .utils.detectors import count_scripts

URL_TOKEN = re.compile(r"https?://\S", re.IGNORECASE)

# Same marker set as the list strategy; Latin markers need a following space
LIST_LINE = re.compile(
    r"^\s*(?:\d+[.)]\s+|[一二三四五六七八九十]+[、.]|[①②③④⑤⑥⑦⑧⑨⑩]"
    r"|[a-zA-Z][.)]\s+|[-*•·▪▫◦‣⁃]\s+)\S",
    re.MULTILINE,
)

# camelCase/PascalCase | snake_case | kebab-case
IDENTIFIER_SHAPE = re.compile(
    r"[a-z][A-Z]|[A-Z]{2,}[a-z]|[A-Za-z0-9]_[A-Za-z0-9]|[A-Za-z]-[A-Za-z]"
)

WRAPPER_CHARS = frozenset(char for pair in WRAPPER_PAIRS for char in pair)


def classify(text: str) -> ContentType:
    """Assign a single content type to text.

    Rules are tried in priority order and the first match wins: url, list,
    code, wrapped, then script counts decide between mixed, chinese,
    english and unknown.

    Args:
        text: Any string, including empty

    Returns:
        The content type of the text
    """
    if not isinstance(text, str) or not text:
        return ContentType.UNKNOWN

    if URL_TOKEN.search(text):
        return ContentType.URL
    if LIST_LINE.search(text):
        return ContentType.LIST
    if IDENTIFIER_SHAPE.search(text):
        return ContentType.CODE
    if any(char in WRAPPER_CHARS for char in text):
        return ContentType.WRAPPED

    cjk_count, latin_count = count_scripts(text)
    if cjk_count > 0 and latin_count > 0:
        return ContentType.MIXED
    if cjk_count > latin_count:
        return ContentType.CHINESE
    if latin_count > 0:
        return ContentType.ENGLISH
    return ContentType.UNKNOWN
