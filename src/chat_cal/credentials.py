"""Credential storage for chat-cal.

Credentials live in a dotenv-format file managed with ``python-dotenv``
(:func:`dotenv.get_key` / :func:`dotenv.set_key`), written by ``chat-cal
init`` and read once by ``chat-cal run``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from dotenv import get_key, set_key

from chat_cal.exceptions import CredentialNotFoundError, CredentialStoreError

logger = logging.getLogger(__name__)

PHONE_NUMBER_KEY = "CHAT_PHONE_NUMBER"
API_KEY_KEY = "GEMINI_API_KEY"

_INIT_HINT = "Did you run 'chat-cal init'?"


class CredentialStore(Protocol):
    """A simple string key-value store."""

    def get(self, key: str) -> str:
        """Return the value stored under *key*.

        Raises:
            CredentialNotFoundError: If *key* is absent or empty.
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*.

        Raises:
            CredentialStoreError: If the value cannot be written.
        """
        ...


class DotenvCredentialStore:
    """:class:`CredentialStore` backed by a dotenv file.

    Args:
        path: Location of the dotenv file.  It is created on first
            :meth:`set`.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str:
        if not self._path.is_file():
            raise CredentialNotFoundError(key, f"Credential file not found: {self._path}")
        value = get_key(self._path, key)
        if value is None or not value.strip():
            raise CredentialNotFoundError(key)
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch(mode=0o600, exist_ok=True)
            set_key(self._path, key, value, quote_mode="never")
        except OSError as exc:
            raise CredentialStoreError(f"Failed to store {key} in {self._path}: {exc}") from exc
        logger.info("Stored %s in %s", key, self._path)


@dataclass(frozen=True)
class Credentials:
    """Process-wide credentials, read once at startup.

    Attributes:
        phone_number: Chat phone number, digits with country code.
        api_key: Gemini API key.
    """

    phone_number: str
    api_key: str

    def __repr__(self) -> str:
        return f"Credentials(phone_number={self.phone_number!r}, api_key='***')"


def load_credentials(store: CredentialStore) -> Credentials:
    """Read both credentials from *store*.

    Raises:
        CredentialNotFoundError: If either credential is missing.  The
            message tells the operator to run the ``init`` command.
    """
    values: dict[str, str] = {}
    for key in (PHONE_NUMBER_KEY, API_KEY_KEY):
        try:
            values[key] = store.get(key)
        except CredentialNotFoundError as exc:
            raise CredentialNotFoundError(
                key, f"Failed to retrieve {key}: {exc}. {_INIT_HINT}"
            ) from exc

    return Credentials(phone_number=values[PHONE_NUMBER_KEY], api_key=values[API_KEY_KEY])
