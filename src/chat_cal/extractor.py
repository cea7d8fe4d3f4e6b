"""Structured extraction of calendar events from chat text.

:class:`StructuredExtractor` makes exactly one language-model call per
instruction and parses the reply into an :class:`EventRecord`.  It never
retries; retry policy, if any, belongs to the caller.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from chat_cal.exceptions import ExtractionParseError
from chat_cal.llm import LanguageModel
from chat_cal.models.event import EventRecord
from chat_cal.prompts import build_extraction_prompt

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 250


class StructuredExtractor:
    """Turn free text into an :class:`EventRecord` via a language model.

    Args:
        model: The language-model capability.  It owns the API credential.
        max_tokens: Output token budget for the extraction call.
    """

    def __init__(self, model: LanguageModel, max_tokens: int = DEFAULT_MAX_TOKENS) -> None:
        self._model = model
        self._max_tokens = max_tokens

    def extract(self, message: str) -> EventRecord:
        """Extract an event record from *message*.

        Args:
            message: Instruction text taken from after the ``@`` trigger.

        Returns:
            The parsed record.  Fields the model could not determine are
            empty strings.

        Raises:
            ExtractionCallError: If the language-model call fails.
            ExtractionParseError: If the reply is not a JSON object with
                exactly the expected string fields.
        """
        prompt = build_extraction_prompt(message)
        raw_text = self._model.complete(prompt, self._max_tokens)
        record = parse_event_response(raw_text)
        logger.info(
            "Extracted event: title=%r date=%r time=%r duration=%r recurrence=%r",
            record.title,
            record.date,
            record.time,
            record.duration,
            record.recurrence,
        )
        return record


def parse_event_response(raw_text: str) -> EventRecord:
    """Parse a raw model reply into an :class:`EventRecord`.

    Args:
        raw_text: The text returned by the language model.

    Returns:
        A fully populated record.

    Raises:
        ExtractionParseError: If *raw_text* is empty, not JSON, not a JSON
            object, or does not match the five-field shape.  The error
            carries the raw text.
    """
    if not raw_text or not raw_text.strip():
        raise ExtractionParseError("Empty response from language model", raw_response=raw_text or "")

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise ExtractionParseError(f"Invalid JSON: {exc}", raw_response=raw_text) from exc

    if not isinstance(data, dict):
        raise ExtractionParseError(
            f"Expected a JSON object, got {type(data).__name__}", raw_response=raw_text
        )

    try:
        return EventRecord.model_validate(data)
    except ValidationError as exc:
        raise ExtractionParseError(
            f"Schema validation failed: {exc}", raw_response=raw_text
        ) from exc
