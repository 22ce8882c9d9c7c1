"""Clipboard collaborators, history and polling monitor."""

import logging
import time
import uuid
from collections import defaultdict
from typing import Any, Callable, Protocol

from .analyzer import ClipboardContentAnalyzer
from .exceptions import ClipboardSecurityError
from .models import AnalysisReport, ClipboardRecord

logger = logging.getLogger(__name__)

ANALYZED_TOPIC = "clipboard.analyzed"
PREVIEW_CHARS = 100


class ClipboardReader(Protocol):
    """Read access to the system clipboard.

    ``read_text`` may raise PermissionError, OSError or
    ClipboardSecurityError; callers treat all of them as "no text".
    """

    def read_text(self) -> str: ...


class Broadcaster(Protocol):
    """Fire-and-forget notification channel to other surfaces."""

    def publish(self, topic: str, payload: dict[str, Any]) -> None: ...


class InMemoryBroadcaster:
    """Broadcaster delivering payloads to subscribers in the same process."""

    def __init__(self):
        self._subscribers: dict[str, list[Callable[[dict], None]]] = defaultdict(list)

    def subscribe(self, topic: str, callback: Callable[[dict], None]) -> None:
        self._subscribers[topic].append(callback)

    def publish(self, topic: str, payload: dict[str, Any]) -> None:
        for callback in list(self._subscribers.get(topic, ())):
            try:
                callback(payload)
            except Exception:
                logger.exception(f"Subscriber of {topic!r} failed")


def make_preview(text: str, max_length: int = PREVIEW_CHARS) -> str:
    """First line of text, cut at max_length with an ellipsis."""
    preview = text.splitlines()[0] if text else ""
    if len(preview) > max_length:
        preview = preview[:max_length] + "..."
    return preview


class ClipboardHistory:
    """Newest-first in-memory clipboard history with a size cap."""

    def __init__(self, max_items: int = 100):
        self.max_items = max_items
        self._records: list[ClipboardRecord] = []

    def add(
        self,
        text: str,
        source: str = "clipboard",
        tags: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ClipboardRecord | None:
        """Record text at the front of the history.

        Text already present is moved to the front with its access count
        bumped instead of being stored twice.

        Returns:
            The stored record, or None for blank text
        """
        if not isinstance(text, str) or not text.strip():
            return None
        text = text.strip()
        now = time.time()

        for index, record in enumerate(self._records):
            if record.text == text:
                record.access_count += 1
                record.last_accessed = now
                record.timestamp = now
                self._records.insert(0, self._records.pop(index))
                return record

        record = ClipboardRecord(
            id=uuid.uuid4().hex,
            text=text,
            preview=make_preview(text),
            length=len(text),
            source=source,
            timestamp=now,
            last_accessed=now,
            tags=list(tags or []),
            metadata=dict(metadata or {}),
        )
        self._records.insert(0, record)
        del self._records[self.max_items :]
        return record

    def get(self, record_id: str) -> ClipboardRecord | None:
        return next((r for r in self._records if r.id == record_id), None)

    def remove(self, record_id: str) -> bool:
        before = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        return len(self._records) < before

    def search(self, term: str) -> list[ClipboardRecord]:
        """Records whose text, preview or tags contain term, ignoring case."""
        term = term.lower()
        return [
            r
            for r in self._records
            if term in r.text.lower()
            or term in r.preview.lower()
            or any(term in tag.lower() for tag in r.tags)
        ]

    def items(self) -> list[ClipboardRecord]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class ClipboardMonitor:
    """Polls the clipboard and analyzes each new text once."""

    def __init__(
        self,
        reader: ClipboardReader,
        analyzer: ClipboardContentAnalyzer,
        history: ClipboardHistory | None = None,
        broadcaster: Broadcaster | None = None,
    ):
        self.reader = reader
        self.analyzer = analyzer
        self.history = history if history is not None else ClipboardHistory(
            analyzer.config.max_history_items
        )
        self.broadcaster = broadcaster
        self.last_text: str | None = None

    def read(self) -> str | None:
        """Read the clipboard, returning None when it is unavailable."""
        try:
            return self.reader.read_text()
        except (PermissionError, ClipboardSecurityError, OSError) as e:
            logger.debug(f"Clipboard unavailable: {e}")
            return None

    async def poll(self) -> AnalysisReport | None:
        """Analyze the clipboard if it holds new, non-blank text.

        Returns:
            The report for the new text, or None if there was nothing new
        """
        text = self.read()
        if not text or not text.strip() or text == self.last_text:
            return None
        self.last_text = text

        report = await self.analyzer.analyze(text)
        self.history.add(text, tags=[report.type.value])
        if self.broadcaster is not None:
            self.broadcaster.publish(ANALYZED_TOPIC, {"text": text, "report": report.to_dict()})
        return report
