"""Data models for segmentation and clipboard analysis."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MAX_SEGMENT_LENGTH = 200


class ContentType(str, Enum):
    """Heuristic category assigned to a text before strategy selection."""

    URL = "url"
    LIST = "list"
    CODE = "code"
    WRAPPED = "wrapped"
    MIXED = "mixed"
    CHINESE = "chinese"
    ENGLISH = "english"
    UNKNOWN = "unknown"


class ReportType(str, Enum):
    """Category of a clipboard snapshot."""

    EMPTY = "empty"
    LINKS = "links"
    PATHS = "paths"
    CODE = "code"
    TABLE = "table"
    CHINESE_TEXT = "chinese_text"
    ENGLISH_TEXT = "english_text"
    UNKNOWN = "unknown"


@dataclass
class StrategyContext:
    """What a strategy gets to know about the call besides the text."""

    content_type: ContentType
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class DetectionFlags:
    """Boolean detector results for a clipboard snapshot."""

    has_links: bool = False
    has_paths: bool = False
    has_emails: bool = False
    has_phones: bool = False
    has_code: bool = False
    has_table: bool = False
    has_chinese: bool = False
    has_english: bool = False

    def to_dict(self) -> dict:
        """Convert to the camelCase mapping sent to other extension surfaces."""
        return {
            "hasLinks": self.has_links,
            "hasPaths": self.has_paths,
            "hasEmails": self.has_emails,
            "hasPhones": self.has_phones,
            "hasCode": self.has_code,
            "hasTable": self.has_table,
            "hasChinese": self.has_chinese,
            "hasEnglish": self.has_english,
        }


@dataclass
class AnalysisReport:
    """Composite classification result for one clipboard snapshot."""

    type: ReportType = ReportType.UNKNOWN
    confidence: float = 0.5
    details: DetectionFlags = field(default_factory=DetectionFlags)
    links: list[str] = field(default_factory=list)
    segments: list[str] = field(default_factory=list)
    structured_data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "type": self.type.value,
            "confidence": self.confidence,
            "details": self.details.to_dict(),
            "links": list(self.links),
            "segments": list(self.segments),
            "structuredData": self.structured_data,
        }


@dataclass
class ClipboardRecord:
    """One entry of the clipboard history."""

    id: str
    text: str
    preview: str
    length: int
    source: str
    timestamp: float
    last_accessed: float
    access_count: int = 1
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
