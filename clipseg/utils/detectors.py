"""Regex detectors for links, contact data, paths and other clipboard formats."""

import re
from urllib.parse import quote

from ..strategies.base import CJK_CHAR, LATIN_CHAR
from ..strategies.url import classify_url

LINK_PATTERN = re.compile(r"https?://[^\s<>\"{}|\\^`\[\]]+", re.IGNORECASE)
LINK_TRAILING_PUNCTUATION = ".,;:!?)'"
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
# Chinese mobile or landline numbers with an optional +86 prefix
PHONE_PATTERN = re.compile(r"(?:\+86[-\s]?)?(?:1[3-9]\d{9}|0\d{2,3}[-\s]?\d{7,8})")
IP_PATTERN = re.compile(
    r"(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
)
DATE_PATTERN = re.compile(r"\d{4}[-/年]\d{1,2}[-/月]\d{1,2}")
PATH_PATTERNS = (
    re.compile(r"\"[a-zA-Z]:[\\/][^\"]*\""),
    re.compile(r"'[a-zA-Z]:[\\/][^']*'"),
    re.compile(r"(?<!\w)[a-zA-Z]:[\\/][^\s<>\"|?*]+"),
    re.compile(r"/[\\/]?(?:home|Users|usr)[\\/][^\s<>\"|?*]+"),
)
WINDOWS_PATH = re.compile(r"^([a-zA-Z]):[\\/](.*)$")
GITHUB_REPOSITORY = re.compile(r"github\.com[/:]([\w-]+)/([\w.-]+)", re.IGNORECASE)
BARE_REPOSITORY = re.compile(r"^([\w-]+)/([\w.-]+)$")
REPOSITORY_MIRRORS = (
    "https://github.com",
    "https://zread.ai",
    "https://deepwiki.com",
    "https://context7.com",
)
CODE_INDICATORS = (
    "function", "const", "let", "var", "if", "for", "while", "return",
    "import", "export", "class", "def", "print", "console.log",
)
CODE_INDICATOR_PATTERNS = tuple(
    re.compile(rf"\b{re.escape(indicator)}\b") for indicator in CODE_INDICATORS
)


def _unique(items) -> list[str]:
    return list(dict.fromkeys(items))


def extract_links(text: str) -> list[str]:
    """Return the http(s) URLs in text, de-duplicated, without trailing punctuation."""
    if not text:
        return []
    links = (match.rstrip(LINK_TRAILING_PUNCTUATION) for match in LINK_PATTERN.findall(text))
    return _unique(link for link in links if "://" in link)


def categorize_links(links: list[str]) -> dict[str, list[str]]:
    """Group links by URL type (github, video, pdf, ...)."""
    categories: dict[str, list[str]] = {}
    for link in links:
        categories.setdefault(classify_url(link), []).append(link)
    return categories


def extract_emails(text: str) -> list[str]:
    if not text or not text.strip():
        return []
    return _unique(EMAIL_PATTERN.findall(text))


def extract_phone_numbers(text: str) -> list[str]:
    if not text or not text.strip():
        return []
    return _unique(PHONE_PATTERN.findall(text))


def extract_ip_addresses(text: str) -> list[str]:
    if not text:
        return []
    return _unique(IP_PATTERN.findall(text))


def extract_dates(text: str) -> list[str]:
    """Return date prefixes such as 2024-01-31, 2024/1/31 or 2024年1月31."""
    if not text:
        return []
    return _unique(DATE_PATTERN.findall(text))


def extract_paths(text: str) -> list[str]:
    """Find Windows drive paths (quoted or bare) and Unix home/usr paths.

    Surrounding quotes are removed from quoted paths.
    """
    if not text:
        return []
    paths = []
    for pattern in PATH_PATTERNS:
        paths.extend(match.strip("\"'") for match in pattern.findall(text))
    return _unique(paths)


def convert_windows_path(path: str) -> dict[str, str] | None:
    """Render a Windows drive path in the forms other tools expect.

    Args:
        path: Path such as ``C:\\Users\\me\\file.txt``

    Returns:
        Mapping with ``original``, ``forward_slash``, ``file_url`` and
        ``wsl`` forms, or None if path is not a drive path
    """
    match = WINDOWS_PATH.match(path.strip().strip("\"'"))
    if not match:
        return None
    drive, rest = match.groups()
    rest = rest.replace("\\", "/")
    forward_slash = f"{drive}:/{rest}"
    return {
        "original": path,
        "forward_slash": forward_slash,
        "file_url": "file:///" + quote(forward_slash, safe="/:"),
        "wsl": f"/mnt/{drive.lower()}/{rest}",
    }


def generate_repository_links(text: str) -> list[str]:
    """Build GitHub and mirror links for a repository reference.

    Accepts text containing ``github.com/<user>/<repo>`` or a bare
    ``user/repo``.

    Returns:
        GitHub, zread.ai, deepwiki.com and context7.com URLs, or an empty
        list if no repository is referenced
    """
    if not text:
        return []
    match = GITHUB_REPOSITORY.search(text) or BARE_REPOSITORY.match(text.strip())
    if not match:
        return []
    user, repo = match.groups()
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not repo:
        return []
    return [f"{base}/{user}/{repo}" for base in REPOSITORY_MIRRORS]


def code_indicator_count(text: str) -> int:
    """Number of distinct programming keywords appearing as whole words."""
    return sum(1 for pattern in CODE_INDICATOR_PATTERNS if pattern.search(text))


def looks_like_table(text: str) -> bool:
    """Tab separated, or pipe separated over at least three lines."""
    return "\t" in text or ("|" in text and len(text.split("\n")) > 2)


def count_scripts(text: str) -> tuple[int, int]:
    """Return the number of CJK ideographs and Latin letters in text."""
    return len(CJK_CHAR.findall(text)), len(LATIN_CHAR.findall(text))


def extract_formats(text: str) -> list[dict]:
    """Run every extractor and return the non-empty results.

    Returns:
        List of ``{"type": name, "data": [...]}`` in a fixed order: links,
        emails, phones, ips, paths, repositories, dates
    """
    extractors = (
        ("links", extract_links),
        ("emails", extract_emails),
        ("phones", extract_phone_numbers),
        ("ips", extract_ip_addresses),
        ("paths", extract_paths),
        ("repositories", lambda t: generate_repository_links(t) if GITHUB_REPOSITORY.search(t) else []),
        ("dates", extract_dates),
    )
    results = []
    for name, extractor in extractors:
        data = extractor(text)
        if data:
            results.append({"type": name, "data": data})
    return results
