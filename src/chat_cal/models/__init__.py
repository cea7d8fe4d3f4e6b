"""Data models for chat-cal."""

from __future__ import annotations

from chat_cal.models.event import (
    EVENT_FIELDS,
    RECURRENCE_VALUES,
    REQUIRED_FIELDS,
    EventRecord,
)

__all__ = [
    "EVENT_FIELDS",
    "EventRecord",
    "RECURRENCE_VALUES",
    "REQUIRED_FIELDS",
]
