"""Logging setup for the chat-cal watcher and CLI.

Every record goes to *stderr* as ``time | level | logger | message`` so the
console echo of accepted events on *stdout* stays readable.
"""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Marks the stderr handler owned by chat-cal; other root handlers are left alone.
_HANDLER_ATTR = "_chat_cal_log_handler"

# Gemini and HTTP client loggers; each poll cycle that reaches the model
# would otherwise add request lines between the watcher's own messages.
_NOISY_LOGGERS = ("google_genai", "httpx", "urllib3")


def _quiet_client_loggers(numeric_level: int) -> None:
    client_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)


def _owned_handler(root: logging.Logger) -> logging.Handler | None:
    return next((h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)), None)


def setup_logging(level: str = "INFO") -> None:
    """Point the root logger at *stderr* with chat-cal's pipe format.

    The Gemini and HTTP client loggers are held at WARNING unless *level*
    is DEBUG.  A second call only updates levels.

    Args:
        level: Logging level name, case-insensitive (``LOG_LEVEL`` or
            ``DEBUG`` from ``--verbose``).

    Raises:
        ValueError: If *level* is not a recognised logging level string.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric_level)
    _quiet_client_loggers(numeric_level)

    handler = _owned_handler(root)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)
    handler.setLevel(numeric_level)
