"""URL decomposition and URL type identification."""

import logging
import re
from urllib.parse import parse_qsl, urlsplit

from ..models import StrategyContext
from .base import SegmentationStrategy

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(
    r"https?://[\w.-]+(?::[0-9]+)?"
    r"(?:/[\w/._-]*(?:\?[\w&=%.+-]*)?(?:#[\w._-]*)?)?",
    re.IGNORECASE | re.ASCII,
)
FILE_EXTENSION = re.compile(r"^[A-Za-z0-9]{1,6}$")
PRIVATE_LAN_HOST = re.compile(r"^192\.168\.\d+\.\d+$")

# Checked in order, first match wins
HOST_TYPES = (
    ("github", ("github.com",)),
    ("stackoverflow", ("stackoverflow.com", "stackexchange.com")),
    ("search_engine", ("google.", "bing.", "baidu.com")),
    ("video", ("youtube.com", "vimeo.com")),
    ("social", ("twitter.com", "facebook.com", "instagram.com", "linkedin.com")),
    ("documentation", ("docs.", "documentation.")),
)
PATH_SUFFIX_TYPES = (
    ("pdf", (".pdf",)),
    ("word", (".docx", ".doc")),
    ("excel", (".xlsx", ".xls")),
    ("powerpoint", (".ppt", ".pptx")),
    ("image", (".jpg", ".jpeg", ".png", ".gif", ".webp")),
    ("media", (".mp3", ".mp4", ".avi", ".mov")),
)


def identify_url_type(hostname: str, path: str) -> str:
    """Classify a URL by hostname substrings and path suffixes.

    Args:
        hostname: Lowercased host name
        path: URL path

    Returns:
        One of github, stackoverflow, search_engine, video, social,
        documentation, api, pdf, word, excel, powerpoint, image, media,
        local or general
    """
    for url_type, needles in HOST_TYPES:
        if any(needle in hostname for needle in needles):
            return url_type
    if "api." in hostname or "/api/" in path:
        return "api"
    for url_type, suffixes in PATH_SUFFIX_TYPES:
        if path.endswith(suffixes):
            return url_type
    if "localhost" in hostname or "127.0.0.1" in hostname or PRIVATE_LAN_HOST.match(hostname):
        return "local"
    return "general"


def classify_url(url: str) -> str:
    """Return the URL type of a URL string, ``general`` when it cannot be parsed."""
    try:
        parts = urlsplit(url)
        return identify_url_type(parts.hostname or "", parts.path)
    except ValueError:
        return "general"


class UrlStrategy(SegmentationStrategy):
    """Decomposes each URL into host, path segments, query and type tag."""

    name = "url"

    def segment(self, text: str, context: StrategyContext) -> list[str]:
        results = []
        for match in URL_PATTERN.finditer(text):
            url = match.group(0)
            try:
                results.extend(self.decompose(url))
            except ValueError:
                logger.debug(f"Could not parse URL, keeping it whole: {url}")
                results.append(url)
        return results

    def decompose(self, url: str) -> list[str]:
        """Break a URL into its parts.

        Args:
            url: Absolute http(s) URL

        Returns:
            Host name, path segments, query keys and values, file extension
            and URL type tag, in that order

        Raises:
            ValueError: If the URL has no host or an invalid port
        """
        parts = urlsplit(url)
        # .port raises ValueError for out-of-range ports
        parts.port
        hostname = parts.hostname
        if not hostname:
            raise ValueError(f"URL has no host: {url}")

        results = [hostname]
        results.extend(segment for segment in parts.path.split("/") if segment)

        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            results.append(key)
            if value:
                results.append(value)

        path_parts = parts.path.split(".")
        if len(path_parts) > 1 and FILE_EXTENSION.match(path_parts[-1]):
            results.append(path_parts[-1])

        results.append(identify_url_type(hostname, parts.path))
        return results
