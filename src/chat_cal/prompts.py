"""Prompt builder for the event-extraction call.

The prompt asks the language model for a single JSON object with exactly
the five :data:`~chat_cal.models.event.EVENT_FIELDS`.
"""

from __future__ import annotations

import json

from chat_cal.models.event import EVENT_FIELDS

_EXAMPLE_REPLY = {
    "title": "event title",
    "date": "event date",
    "time": "event time",
    "duration": "event duration",
    "recurrence": "annually",
}


def build_extraction_prompt(message: str) -> str:
    """Build the prompt that turns a chat instruction into event JSON.

    Args:
        message: The instruction text that followed the ``@`` trigger.

    Returns:
        The complete prompt string.
    """
    field_list = ", ".join(EVENT_FIELDS[:-1]) + f", and {EVENT_FIELDS[-1]}"
    example = json.dumps(_EXAMPLE_REPLY)

    return f"""\
Extract the event {field_list} from this text: {message.strip()}

Respond with a single JSON object and nothing else, exactly like this:
{example}

Rules:
- Use exactly these five keys: {", ".join(EVENT_FIELDS)}.
- Every value must be a string.
- The recurrence can be "annually" for birthdays or anniversaries, or "none" \
for single day events.
- If any information is missing, leave the field as an empty string "".
"""
