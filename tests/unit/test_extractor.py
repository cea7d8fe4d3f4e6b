"""Unit tests for StructuredExtractor and parse_event_response.

All tests use an in-memory language model -- no Gemini calls are made.
"""

from __future__ import annotations

import json
import logging

import pytest

from chat_cal.exceptions import ExtractionCallError, ExtractionParseError
from chat_cal.extractor import DEFAULT_MAX_TOKENS, StructuredExtractor, parse_event_response
from chat_cal.models.event import EventRecord
from chat_cal.responses import success
from tests.fakes import COMPLETE_RESPONSE, FakeLanguageModel

# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestExtract:
    """Successful extraction through a fake model."""

    def test_round_trip_birthday(self) -> None:
        """The exact five-field reply yields a matching record and confirmation."""
        model = FakeLanguageModel([COMPLETE_RESPONSE])
        extractor = StructuredExtractor(model)

        record = extractor.extract(" Sam's birthday on March 1st at 2pm for an hour")

        assert record == EventRecord(
            title="Sam's Birthday",
            date="2025-03-01",
            time="14:00",
            duration="1h",
            recurrence="annually",
        )
        text = success(record)
        for value in ("Sam's Birthday", "2025-03-01", "14:00", "1h", "annually"):
            assert value in text

    def test_sends_instruction_in_prompt(self) -> None:
        """The instruction text reaches the model inside the prompt."""
        model = FakeLanguageModel([COMPLETE_RESPONSE])

        StructuredExtractor(model).extract("standup tomorrow 9am 15 minutes")

        assert len(model.prompts) == 1
        assert "standup tomorrow 9am 15 minutes" in model.prompts[0]

    def test_uses_default_token_budget(self) -> None:
        """The default output budget is 250 tokens."""
        model = FakeLanguageModel([COMPLETE_RESPONSE])

        StructuredExtractor(model).extract("x")

        assert model.max_tokens == [DEFAULT_MAX_TOKENS]
        assert DEFAULT_MAX_TOKENS == 250

    def test_custom_token_budget(self) -> None:
        model = FakeLanguageModel([COMPLETE_RESPONSE])

        StructuredExtractor(model, max_tokens=64).extract("x")

        assert model.max_tokens == [64]

    def test_incomplete_reply_is_still_a_record(self) -> None:
        """Empty fields are returned as-is; completeness is not checked here."""
        reply = json.dumps(
            {"title": "", "date": "tomorrow", "time": "", "duration": "", "recurrence": ""}
        )
        record = StructuredExtractor(FakeLanguageModel([reply])).extract("something tomorrow")

        assert record.title == ""
        assert record.date == "tomorrow"

    def test_logs_extracted_event(self, caplog: pytest.LogCaptureFixture) -> None:
        """A successful extraction is logged at INFO with the title."""
        with caplog.at_level(logging.INFO, logger="chat_cal.extractor"):
            StructuredExtractor(FakeLanguageModel([COMPLETE_RESPONSE])).extract("x")

        assert "Sam's Birthday" in caplog.text


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestExtractFailures:
    """Call and parse failures surface as distinct exceptions."""

    def test_call_error_propagates(self) -> None:
        """A failing model call raises ExtractionCallError, no retry."""
        model = FakeLanguageModel([ExtractionCallError("401 UNAUTHENTICATED")])

        with pytest.raises(ExtractionCallError):
            StructuredExtractor(model).extract("lunch")

        assert len(model.prompts) == 1

    def test_parse_error_is_not_retried(self) -> None:
        """A malformed reply is not retried inside the extractor."""
        model = FakeLanguageModel(["not json", COMPLETE_RESPONSE])

        with pytest.raises(ExtractionParseError):
            StructuredExtractor(model).extract("lunch")

        assert len(model.prompts) == 1


class TestParseEventResponse:
    """Parsing of raw model replies."""

    @pytest.mark.parametrize(
        "raw",
        [
            '{"title": "Lunch", "date": "Friday", "time": "12:00"',
            "Sure! Here is the event you asked for.",
            '["title", "date"]',
            '"just a string"',
        ],
        ids=["truncated", "prose", "array", "string"],
    )
    def test_malformed_reply_carries_raw_text(self, raw: str) -> None:
        """Non-object or invalid JSON raises with the raw text attached."""
        with pytest.raises(ExtractionParseError) as exc_info:
            parse_event_response(raw)

        assert exc_info.value.raw_response == raw

    @pytest.mark.parametrize("raw", ["", "   \n"], ids=["empty", "whitespace"])
    def test_empty_reply(self, raw: str) -> None:
        with pytest.raises(ExtractionParseError, match="Empty response"):
            parse_event_response(raw)

    def test_missing_key_is_parse_error(self) -> None:
        """A reply without recurrence does not yield a partial record."""
        raw = json.dumps({"title": "Lunch", "date": "Friday", "time": "12:00", "duration": "1h"})

        with pytest.raises(ExtractionParseError, match="Schema validation failed") as exc_info:
            parse_event_response(raw)

        assert exc_info.value.raw_response == raw

    def test_extra_key_is_parse_error(self) -> None:
        raw = json.dumps(
            {
                "title": "Lunch",
                "date": "Friday",
                "time": "12:00",
                "duration": "1h",
                "recurrence": "none",
                "location": "Cafe",
            }
        )

        with pytest.raises(ExtractionParseError):
            parse_event_response(raw)

    def test_null_fields_become_empty(self) -> None:
        raw = json.dumps(
            {"title": "Lunch", "date": None, "time": "12:00", "duration": "1h", "recurrence": None}
        )

        record = parse_event_response(raw)

        assert record.date == ""
        assert record.recurrence == ""
