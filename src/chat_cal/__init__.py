"""chat-cal: calendar events from chat mentions.

Watches a chat web page for messages containing an ``@`` trigger, extracts
the event they describe with a language model, and replies in the chat.
"""

from __future__ import annotations

from chat_cal.exceptions import (
    ChatCalError,
    ExtractionCallError,
    ExtractionError,
    ExtractionParseError,
    PageDriverError,
    SessionFatalError,
    TransientReadError,
)
from chat_cal.extractor import StructuredExtractor, parse_event_response
from chat_cal.models.event import EventRecord
from chat_cal.validator import Verdict, validate
from chat_cal.watcher import CycleOutcome, MentionWatcher, extract_instruction

__version__ = "0.1.0"

__all__ = [
    "ChatCalError",
    "CycleOutcome",
    "EventRecord",
    "ExtractionCallError",
    "ExtractionError",
    "ExtractionParseError",
    "MentionWatcher",
    "PageDriverError",
    "SessionFatalError",
    "StructuredExtractor",
    "TransientReadError",
    "Verdict",
    "extract_instruction",
    "parse_event_response",
    "validate",
]
