"""Mention watcher: the polling loop that answers ``@`` messages.

Each poll cycle reads the latest visible chat message, and when it
contains the ``@`` trigger, runs the text after the first ``@`` through
extraction, validation and reply composition, then types the reply into
the chat.  The loop keeps no state between cycles, so an unchanged
latest message is processed again on the next poll.

Only :class:`~chat_cal.exceptions.SessionFatalError` escapes the loop;
every other failure is logged and, where the user is waiting for an
answer, turned into an error reply.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable

from chat_cal import responses
from chat_cal.event_store import EventStore
from chat_cal.exceptions import (
    EventStoreError,
    ExtractionCallError,
    ExtractionParseError,
    PageDriverError,
    SessionFatalError,
    TransientReadError,
)
from chat_cal.extractor import StructuredExtractor
from chat_cal.models.event import EventRecord
from chat_cal.page_driver import ChatSelectors, PageDriver
from chat_cal.validator import Verdict, missing_fields, validate

logger = logging.getLogger(__name__)

TRIGGER = "@"
DEFAULT_POLL_INTERVAL = 5.0


class CycleOutcome(enum.Enum):
    """What a single poll cycle did."""

    READ_FAILED = "read_failed"
    NO_TRIGGER = "no_trigger"
    NOT_UNDERSTOOD = "not_understood"
    INCOMPLETE = "incomplete"
    ACCEPTED = "accepted"
    STORE_FAILED = "store_failed"


def extract_instruction(message: str) -> str | None:
    """Return the text after the first ``@`` in *message*, or ``None``."""
    index = message.find(TRIGGER)
    if index == -1:
        return None
    return message[index + len(TRIGGER):]


def unknown_sender(message: str) -> str:  # noqa: ARG001
    """Default sender identifier; the chat page does not expose authors."""
    return "unknown"


class MentionWatcher:
    """Poll a chat page and answer ``@`` mentions with event confirmations.

    Args:
        driver: The chat page capability.
        extractor: Turns instruction text into an :class:`EventRecord`.
        poll_interval: Seconds to wait before each poll.
        selectors: CSS selectors for the latest message, compose box and
            send button.
        identify_sender: Pure function from the raw message text to a
            sender identifier.  Only used when *event_store* is set.
        event_store: Optional store for accepted events.
        echo: Optional callback invoked with every accepted event (the
            CLI prints it to the console).
    """

    def __init__(
        self,
        driver: PageDriver,
        extractor: StructuredExtractor,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        selectors: ChatSelectors | None = None,
        identify_sender: Callable[[str], str] = unknown_sender,
        event_store: EventStore | None = None,
        echo: Callable[[EventRecord], None] | None = None,
    ) -> None:
        self._driver = driver
        self._extractor = extractor
        self._poll_interval = poll_interval
        self._selectors = selectors or ChatSelectors()
        self._identify_sender = identify_sender
        self._event_store = event_store
        self._echo = echo

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(
        self,
        stop: threading.Event | None = None,
        max_cycles: int | None = None,
    ) -> int:
        """Poll until *stop* is set or *max_cycles* cycles have run.

        Each cycle first waits the poll interval, then polls once.

        Args:
            stop: Cancellation token.  Setting it ends the loop at the
                next wait.  Without one the loop runs until *max_cycles*
                or forever.
            max_cycles: Optional upper bound on poll cycles.

        Returns:
            The number of cycles that ran.

        Raises:
            SessionFatalError: If the chat page session is lost.
        """
        stop = stop or threading.Event()
        cycles = 0
        logger.info("Listening for %s mentions every %.1f s", TRIGGER, self._poll_interval)

        while max_cycles is None or cycles < max_cycles:
            if stop.wait(self._poll_interval):
                logger.info("Stop requested, leaving watch loop after %d cycle(s)", cycles)
                break
            outcome = self.poll_once()
            cycles += 1
            logger.debug("Cycle %d finished: %s", cycles, outcome.value)

        return cycles

    # ------------------------------------------------------------------
    # Single cycle
    # ------------------------------------------------------------------

    def poll_once(self) -> CycleOutcome:
        """Run one poll cycle and return what happened.

        Raises:
            SessionFatalError: If the chat page session is lost.
        """
        try:
            message = self._driver.read_text(self._selectors.message)
        except TransientReadError as exc:
            logger.error("Failed to retrieve last message: %s", exc)
            return CycleOutcome.READ_FAILED

        instruction = extract_instruction(message)
        if instruction is None:
            return CycleOutcome.NO_TRIGGER

        logger.info("Mention detected: %r", instruction)
        return self._handle_mention(message, instruction)

    def _handle_mention(self, message: str, instruction: str) -> CycleOutcome:
        try:
            record = self._extractor.extract(instruction)
        except ExtractionCallError as exc:
            logger.error("Failed to parse event details, model call failed: %s", exc)
            self._reply(responses.error_understanding())
            return CycleOutcome.NOT_UNDERSTOOD
        except ExtractionParseError as exc:
            logger.error(
                "Failed to parse event details: %s | Raw response: %s",
                exc,
                exc.raw_response,
            )
            self._reply(responses.error_understanding())
            return CycleOutcome.NOT_UNDERSTOOD

        if validate(record) is Verdict.INCOMPLETE:
            logger.warning("Event %r is missing %s", record.title, ", ".join(missing_fields(record)))
            self._reply(responses.error_missing_fields())
            return CycleOutcome.INCOMPLETE

        if self._event_store is not None:
            sender = self._identify_sender(message)
            try:
                self._event_store.append(sender, record)
            except EventStoreError as exc:
                logger.error("Failed to store event: %s", exc)
                self._reply(responses.error_storing())
                return CycleOutcome.STORE_FAILED

        if self._echo is not None:
            self._echo(record)

        self._reply(responses.success(record))
        return CycleOutcome.ACCEPTED

    def _reply(self, text: str) -> None:
        """Type *text* into the compose box and press send.

        Driver failures are logged; a lost session is re-raised.
        """
        try:
            self._driver.send_keys(self._selectors.input, text)
            self._driver.click(self._selectors.send)
        except SessionFatalError:
            raise
        except PageDriverError as exc:
            logger.error("Failed to send reply %r: %s", text, exc)
            return
        logger.info("Replied: %s", text)
