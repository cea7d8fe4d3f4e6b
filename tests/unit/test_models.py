"""Tests for the EventRecord model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chat_cal.models.event import EVENT_FIELDS, REQUIRED_FIELDS, EventRecord


def _record_data(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "title": "Team lunch",
        "date": "Friday",
        "time": "12:30",
        "duration": "1 hour",
        "recurrence": "none",
    }
    data.update(overrides)
    return data


class TestEventRecord:
    """Construction and validation of EventRecord."""

    def test_all_fields_populated(self) -> None:
        """A full dict produces a record with matching attributes."""
        record = EventRecord.model_validate(_record_data())

        assert record.title == "Team lunch"
        assert record.date == "Friday"
        assert record.time == "12:30"
        assert record.duration == "1 hour"
        assert record.recurrence == "none"

    def test_empty_strings_are_allowed(self) -> None:
        """Empty fields mean 'unknown' and are valid."""
        record = EventRecord.model_validate(_record_data(title="", recurrence=""))

        assert record.title == ""
        assert record.recurrence == ""

    def test_null_becomes_empty_string(self) -> None:
        """JSON null is treated the same as an empty string."""
        record = EventRecord.model_validate(_record_data(duration=None))

        assert record.duration == ""

    def test_values_are_stripped(self) -> None:
        """Surrounding whitespace is removed, so blank counts as empty."""
        record = EventRecord.model_validate(_record_data(title="  Lunch ", time="   "))

        assert record.title == "Lunch"
        assert record.time == ""

    def test_missing_field_rejected(self) -> None:
        """A dict without one of the five keys fails validation."""
        data = _record_data()
        del data["recurrence"]

        with pytest.raises(ValidationError):
            EventRecord.model_validate(data)

    def test_extra_field_rejected(self) -> None:
        """Unknown keys fail validation instead of being dropped."""
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_record_data(location="Cafe Roma"))

    def test_non_string_value_rejected(self) -> None:
        """Numbers are not coerced into strings."""
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_record_data(duration=60))

    def test_record_is_frozen(self) -> None:
        """Records cannot be mutated after creation."""
        record = EventRecord.model_validate(_record_data())

        with pytest.raises(ValidationError):
            record.title = "Changed"  # type: ignore[misc]

    def test_open_recurrence_vocabulary(self) -> None:
        """Recurrence values outside annually/none are kept as-is."""
        record = EventRecord.model_validate(_record_data(recurrence="weekly"))

        assert record.recurrence == "weekly"


class TestFieldConstants:
    def test_required_fields_exclude_recurrence(self) -> None:
        assert REQUIRED_FIELDS == ("title", "date", "time", "duration")
        assert "recurrence" in EVENT_FIELDS
        assert "recurrence" not in REQUIRED_FIELDS
