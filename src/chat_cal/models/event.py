"""Pydantic model for a calendar event extracted from a chat message.

:class:`EventRecord` is both the parsed language-model reply and the value
that flows through validation and reply composition.  Every field is a
free-form string; an empty string means the model could not determine it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

#: Field names the model is asked to return, in prompt order.
EVENT_FIELDS: tuple[str, ...] = ("title", "date", "time", "duration", "recurrence")

#: Fields that must be non-empty for an event to be accepted.
REQUIRED_FIELDS: tuple[str, ...] = ("title", "date", "time", "duration")

#: Recurrence values the prompt offers the model.  The field itself stays
#: open so that unexpected values are passed through rather than rejected.
RECURRENCE_VALUES: tuple[str, ...] = ("annually", "none")


class EventRecord(BaseModel):
    """A structured calendar event.

    Records are immutable and reject unknown keys, so a model reply with
    a different field set fails validation instead of producing a partial
    record.

    Attributes:
        title: Short event title.
        date: Event date as written by the model (not parsed).
        time: Event start time as written by the model.
        duration: Event duration as written by the model.
        recurrence: ``"annually"``, ``"none"`` or ``""`` when unspecified.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    date: str
    time: str
    duration: str
    recurrence: str

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        """Treat JSON ``null`` as an undetermined (empty) field."""
        if value is None:
            return ""
        return value

    @field_validator("*")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()
