"""User-facing reply texts sent back to the chat."""

from __future__ import annotations

from chat_cal.models.event import EventRecord

ERROR_UNDERSTANDING = (
    "Sorry, I couldn't understand the event details. Please provide all "
    "information (title, date, time, duration, recurrence) in a clear format."
)
ERROR_MISSING_FIELDS = (
    "Sorry, I need the event title, date, time, and duration to create the event."
)
ERROR_STORING = "Sorry, I couldn't store the event. Please try again."

_DEFAULT_RECURRENCE = "none"


def error_understanding() -> str:
    """Reply for a failed or unparseable extraction."""
    return ERROR_UNDERSTANDING


def error_missing_fields() -> str:
    """Reply for an incomplete event."""
    return ERROR_MISSING_FIELDS


def error_storing() -> str:
    """Reply for an accepted event that could not be stored."""
    return ERROR_STORING


def success(record: EventRecord) -> str:
    """Confirmation reply summarizing every field of *record*.

    An empty recurrence is shown as ``none``.
    """
    recurrence = record.recurrence or _DEFAULT_RECURRENCE
    return (
        f"Okay, I've noted the event: {record.title} on {record.date} "
        f"at {record.time} for {record.duration}. Recurrence: {recurrence}"
    )
