"""Configuration loading for chat-cal.

Reads settings from environment variables (with .env support via python-dotenv)
and validates their values.  Secrets are not part of the settings: the phone
number and Gemini API key live in the credential store
(:mod:`chat_cal.credentials`).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from chat_cal.llm import DEFAULT_MODEL
from chat_cal.page_driver import ChatSelectors


class ConfigError(Exception):
    """Raised when configuration is invalid."""


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        credentials_file: Dotenv file holding the credentials.
        chat_url: URL of the chat web app.
        gemini_model: Gemini model identifier.
        poll_interval_seconds: Delay before each poll of the chat page.
        login_wait_seconds: Grace period after opening the chat page, for
            scanning the QR code.
        headless: Run Chromium without a window.
        browser_profile_dir: Persistent browser profile directory, or
            ``None`` for a throwaway profile.
        events_file: JSON-lines file for accepted events, or ``None`` to
            disable the event store.
        selectors: CSS selectors for the chat page.
        log_level: Logging level (default ``"INFO"``).
    """

    credentials_file: Path = Path("credentials.env")
    chat_url: str = "https://web.whatsapp.com"
    gemini_model: str = DEFAULT_MODEL
    poll_interval_seconds: float = 5.0
    login_wait_seconds: float = 15.0
    headless: bool = False
    browser_profile_dir: Path | None = None
    events_file: Path | None = None
    selectors: ChatSelectors = field(default_factory=ChatSelectors)
    log_level: str = "INFO"


def _env(name: str) -> str:
    return os.environ.get(name, "").strip()


def _parse_seconds(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {raw!r}")


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.  Unset or blank variables keep their
    defaults.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If a numeric or boolean variable has an invalid value.
            The message names the variable.
    """
    load_dotenv()

    values: dict[str, object] = {}

    if raw := _env("CREDENTIALS_FILE"):
        values["credentials_file"] = Path(raw).expanduser()
    if raw := _env("CHAT_URL"):
        values["chat_url"] = raw
    if raw := _env("GEMINI_MODEL"):
        values["gemini_model"] = raw
    if raw := _env("POLL_INTERVAL_SECONDS"):
        values["poll_interval_seconds"] = _parse_seconds("POLL_INTERVAL_SECONDS", raw)
    if raw := _env("LOGIN_WAIT_SECONDS"):
        values["login_wait_seconds"] = _parse_seconds("LOGIN_WAIT_SECONDS", raw)
    if raw := _env("HEADLESS"):
        values["headless"] = _parse_bool("HEADLESS", raw)
    if raw := _env("BROWSER_PROFILE_DIR"):
        values["browser_profile_dir"] = Path(raw).expanduser()
    if raw := _env("EVENTS_FILE"):
        values["events_file"] = Path(raw).expanduser()
    if raw := _env("LOG_LEVEL"):
        values["log_level"] = raw

    defaults = ChatSelectors()
    values["selectors"] = ChatSelectors(
        message=_env("MESSAGE_SELECTOR") or defaults.message,
        input=_env("INPUT_SELECTOR") or defaults.input,
        send=_env("SEND_SELECTOR") or defaults.send,
    )

    return Settings(**values)  # type: ignore[arg-type]
