"""Console echo of accepted events.

:func:`format_event_record` renders an :class:`EventRecord` as labelled
lines; :func:`print_event_record` writes them to stdout.
"""

from __future__ import annotations

import sys

from chat_cal.models.event import EventRecord

_LABELS = (
    ("Event Title", "title"),
    ("Event Date", "date"),
    ("Event Time", "time"),
    ("Event Duration", "duration"),
    ("Event Recurrence", "recurrence"),
)


def format_event_record(record: EventRecord) -> str:
    """Render *record* as one ``Label: value`` line per field."""
    return "\n".join(f"{label}: {getattr(record, name)}" for label, name in _LABELS)


def print_event_record(record: EventRecord) -> None:
    """Format and print *record* to stdout."""
    sys.stdout.write(format_event_record(record) + "\n")
