"""Custom exceptions for chat-cal.

Exception hierarchy::

    ChatCalError                  (base for all chat-cal errors)
    +-- ExtractionError           (language-model extraction failures)
    |   +-- ExtractionCallError   (the model call itself failed)
    |   +-- ExtractionParseError  (the model reply is not the expected JSON)
    +-- PageDriverError           (chat page automation failures)
    |   +-- TransientReadError    (reading the latest message failed)
    |   +-- SessionFatalError     (the browser session is gone)
    +-- CredentialError           (credential store failures)
    |   +-- CredentialNotFoundError
    |   +-- CredentialStoreError
    |   +-- CredentialVerificationError
    +-- EventStoreError           (appending an accepted event failed)

Only :class:`SessionFatalError` is allowed to escape the watcher loop.
"""

from __future__ import annotations


class ChatCalError(Exception):
    """Base exception for chat-cal."""


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------


class ExtractionError(ChatCalError):
    """Base class for failures turning chat text into an event record."""


class ExtractionCallError(ExtractionError):
    """Raised when the language-model call fails.

    Covers network, authentication and rate-limit failures.  The extractor
    never retries; the watcher answers with a generic error reply.
    """


class ExtractionParseError(ExtractionError):
    """Raised when the language-model reply cannot be parsed.

    Covers empty replies, invalid JSON and JSON that does not match the
    expected five-field shape.

    Attributes:
        raw_response: The raw model output that failed to parse.
    """

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


# ---------------------------------------------------------------------------
# Page driver
# ---------------------------------------------------------------------------


class PageDriverError(ChatCalError):
    """Raised when a chat page action (type, click, navigate) fails."""


class TransientReadError(PageDriverError):
    """Raised when the latest message could not be read.

    The watcher logs it and tries again on the next poll cycle.
    """


class SessionFatalError(PageDriverError):
    """Raised when the browser session cannot be established or was lost.

    This is the only error that terminates the watcher loop.
    """


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


class CredentialError(ChatCalError):
    """Base class for credential store failures."""


class CredentialNotFoundError(CredentialError):
    """Raised when a credential key is absent from the store.

    Attributes:
        key: The credential key that was requested.
    """

    def __init__(self, key: str, message: str | None = None) -> None:
        super().__init__(message or f"Credential not found: {key}")
        self.key = key


class CredentialStoreError(CredentialError):
    """Raised when the credential store cannot be written."""


class CredentialVerificationError(CredentialError):
    """Raised when ``init`` cannot verify a phone number or API key."""


# ---------------------------------------------------------------------------
# Event store
# ---------------------------------------------------------------------------


class EventStoreError(ChatCalError):
    """Raised when an accepted event cannot be appended to the event store."""
