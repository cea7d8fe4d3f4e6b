"""Shared fixtures for chat-cal tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

_SETTINGS_VARS = (
    "CREDENTIALS_FILE",
    "CHAT_URL",
    "GEMINI_MODEL",
    "POLL_INTERVAL_SECONDS",
    "LOGIN_WAIT_SECONDS",
    "HEADLESS",
    "BROWSER_PROFILE_DIR",
    "EVENTS_FILE",
    "MESSAGE_SELECTOR",
    "INPUT_SELECTOR",
    "SEND_SELECTOR",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all chat-cal settings variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("chat_cal.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _SETTINGS_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None, None, None]:
    """Reset the root logger after each test to prevent handler leaks."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
