"""Append-only JSON-lines log of accepted events."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from chat_cal.exceptions import EventStoreError
from chat_cal.models.event import EventRecord

logger = logging.getLogger(__name__)


class EventStore(Protocol):
    def append(self, sender: str, record: EventRecord) -> None: ...


class JsonlEventStore:
    """Store each accepted event as one JSON object per line.

    Each line has the keys ``sender``, ``recorded_at`` (ISO 8601, UTC) and
    ``event`` (the record's five fields).

    Args:
        path: The JSON-lines file.  Parent directories are created on
            first write.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def append(self, sender: str, record: EventRecord) -> None:
        """Append *record* for *sender*.

        Raises:
            EventStoreError: If the file cannot be written.
        """
        entry = {
            "sender": sender,
            "recorded_at": datetime.now(timezone.utc).isoformat(),
            "event": record.model_dump(),
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
        except OSError as exc:
            raise EventStoreError(f"Failed to write event to {self._path}: {exc}") from exc

        logger.debug("Stored event %r for %s in %s", record.title, sender, self._path)

    def read_all(self) -> list[dict]:
        """Return every stored entry, oldest first (empty if no file yet)."""
        if not self._path.exists():
            return []
        with open(self._path, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]
