"""Completeness check for extracted events."""

from __future__ import annotations

import enum

from chat_cal.models.event import REQUIRED_FIELDS, EventRecord


class Verdict(enum.Enum):
    """Outcome of :func:`validate`."""

    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


def missing_fields(record: EventRecord) -> list[str]:
    """Return the required fields of *record* that are empty, in order."""
    return [name for name in REQUIRED_FIELDS if not getattr(record, name)]


def validate(record: EventRecord) -> Verdict:
    """Classify *record* as complete or incomplete.

    A record is complete when title, date, time and duration are all
    non-empty.  Recurrence is not checked.
    """
    if missing_fields(record):
        return Verdict.INCOMPLETE
    return Verdict.COMPLETE
