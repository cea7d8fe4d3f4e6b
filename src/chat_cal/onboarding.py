"""Checks run by ``chat-cal init`` before credentials are stored."""

from __future__ import annotations

import logging

import requests

from chat_cal.exceptions import CredentialVerificationError, ExtractionCallError
from chat_cal.llm import LanguageModel

logger = logging.getLogger(__name__)

_LINK_TIMEOUT_SECONDS = 10


def normalize_phone_number(raw: str) -> str:
    """Strip spaces, dashes and a leading ``+`` from *raw*.

    Raises:
        CredentialVerificationError: If the result is not all digits or
            starts with a zero.
    """
    number = raw.strip().lstrip("+").replace(" ", "").replace("-", "")
    if not number.isdigit() or number.startswith("0"):
        raise CredentialVerificationError(
            f"Invalid phone number {raw!r}: use digits with country code, "
            "without + or leading zeros"
        )
    return number


def whatsapp_link(phone_number: str) -> str:
    """Return the WhatsApp direct-chat link for *phone_number*."""
    return f"https://wa.me/{phone_number}"


def normalize_api_key(raw: str) -> str:
    """Strip *raw* and reject a blank key.

    A blank key must never reach ``genai.Client``, which would either fail
    or fall back to a key from the environment.

    Raises:
        CredentialVerificationError: If *raw* is empty or only whitespace.
    """
    api_key = raw.strip()
    if not api_key:
        raise CredentialVerificationError("Gemini API key must not be empty")
    return api_key


def verify_link(url: str, session: requests.Session | None = None) -> None:
    """Check that *url* answers ``HEAD`` with HTTP 200 after redirects.

    Raises:
        CredentialVerificationError: On a network failure or another status.
    """
    http = session or requests.Session()
    try:
        response = http.head(url, allow_redirects=True, timeout=_LINK_TIMEOUT_SECONDS)
    except requests.RequestException as exc:
        raise CredentialVerificationError(f"Failed to check WhatsApp link: {exc}") from exc

    if response.status_code != 200:
        raise CredentialVerificationError(
            f"WhatsApp link is not reachable. Status code: {response.status_code}"
        )
    logger.debug("WhatsApp link %s is reachable", url)


def verify_api_key(model: LanguageModel) -> None:
    """Make a tiny completion to prove the model credential works.

    Raises:
        CredentialVerificationError: If the call fails.
    """
    try:
        model.complete("Hello", max_tokens=10)
    except (ExtractionCallError, ValueError) as exc:
        raise CredentialVerificationError(f"Failed to validate Gemini API key: {exc}") from exc
