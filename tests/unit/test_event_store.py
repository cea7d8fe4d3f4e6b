"""Tests for the JSON-lines event store."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from chat_cal.event_store import JsonlEventStore
from chat_cal.exceptions import EventStoreError
from chat_cal.models.event import EventRecord

_RECORD = EventRecord(
    title="Sam's Birthday",
    date="2025-03-01",
    time="14:00",
    duration="1h",
    recurrence="annually",
)


class TestJsonlEventStore:
    def test_append_writes_one_line_per_event(self, tmp_path: Path) -> None:
        path = tmp_path / "events.jsonl"
        store = JsonlEventStore(path)

        store.append("alice", _RECORD)
        store.append("bob", _RECORD)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        first = json.loads(lines[0])
        assert first["sender"] == "alice"
        assert first["event"] == _RECORD.model_dump()

    def test_recorded_at_is_iso_utc(self, tmp_path: Path) -> None:
        store = JsonlEventStore(tmp_path / "events.jsonl")

        store.append("alice", _RECORD)

        recorded_at = datetime.fromisoformat(store.read_all()[0]["recorded_at"])
        assert recorded_at.utcoffset() is not None
        assert recorded_at.utcoffset().total_seconds() == 0

    def test_read_all_round_trips_events(self, tmp_path: Path) -> None:
        store = JsonlEventStore(tmp_path / "events.jsonl")
        store.append("alice", _RECORD)

        entries = store.read_all()

        assert [EventRecord.model_validate(e["event"]) for e in entries] == [_RECORD]

    def test_read_all_without_file(self, tmp_path: Path) -> None:
        assert JsonlEventStore(tmp_path / "missing.jsonl").read_all() == []

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "data" / "events.jsonl"

        JsonlEventStore(path).append("alice", _RECORD)

        assert path.is_file()

    def test_write_failure_raises_store_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(EventStoreError):
            JsonlEventStore(blocker / "events.jsonl").append("alice", _RECORD)
