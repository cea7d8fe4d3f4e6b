"""Entry point for ``python -m chat_cal``.

Uses stdlib :mod:`argparse` for argument parsing.

Subcommands:
    init -- Ask for the phone number and Gemini API key, verify and store them.
    run  -- Default. Open the chat page and answer ``@`` mentions until
            interrupted.

Exit codes:
    0 -- Completed successfully, or interrupted with Ctrl+C.
    1 -- An error occurred (config, credentials, lost browser session).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
import threading

from chat_cal.config import ConfigError, Settings, load_settings
from chat_cal.credentials import (
    API_KEY_KEY,
    PHONE_NUMBER_KEY,
    DotenvCredentialStore,
    load_credentials,
)
from chat_cal.demo_output import print_event_record
from chat_cal.event_store import JsonlEventStore
from chat_cal.exceptions import CredentialError, SessionFatalError
from chat_cal.extractor import StructuredExtractor
from chat_cal.llm import GeminiLanguageModel
from chat_cal.log import setup_logging
from chat_cal.onboarding import (
    normalize_api_key,
    normalize_phone_number,
    verify_api_key,
    verify_link,
    whatsapp_link,
)
from chat_cal.page_driver import open_session
from chat_cal.watcher import TRIGGER, MentionWatcher

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="chat-cal",
        description="Turn '@' chat messages into calendar events.",
    )

    subparsers = parser.add_subparsers(dest="command")

    init_parser = subparsers.add_parser(
        "init",
        help="Store the chat phone number and Gemini API key.",
    )
    run_parser = subparsers.add_parser(
        "run",
        help="Open the chat page and answer '@' mentions.",
    )
    run_parser.add_argument(
        "--max-cycles",
        type=int,
        default=None,
        help="Stop after this many poll cycles (default: run until interrupted).",
    )

    for sub in (init_parser, run_parser):
        sub.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            default=False,
            help="Enable debug-level logging.",
        )

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, routing to ``run`` when no subcommand is given."""
    known_subcommands = {"init", "run"}
    if not argv:
        argv = ["run"]
    elif argv[0] in {"-h", "--help"}:
        pass
    elif argv[0] not in known_subcommands:
        argv = ["run", *argv]

    return parser.parse_args(argv)


def _handle_init(settings: Settings) -> int:
    """Execute the ``init`` subcommand.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    store = DotenvCredentialStore(settings.credentials_file)

    try:
        phone_number = normalize_phone_number(
            input(
                "Enter your WhatsApp phone number "
                "(including country code, without + or leading zeros): "
            )
        )
        link = whatsapp_link(phone_number)
        verify_link(link)
        store.set(PHONE_NUMBER_KEY, phone_number)
        print(f"WhatsApp Direct Link: {link}")
        logger.info("WhatsApp Direct Link: %s", link)

        api_key = normalize_api_key(getpass.getpass("Enter your Gemini API key: "))
        verify_api_key(
            GeminiLanguageModel(api_key, model=settings.gemini_model, json_output=False)
        )
        store.set(API_KEY_KEY, api_key)
    except CredentialError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Credentials stored in {settings.credentials_file}")
    return 0


def _handle_run(settings: Settings, max_cycles: int | None) -> int:
    """Execute the ``run`` subcommand.

    Returns:
        Exit code: ``0`` on interrupt or after *max_cycles*, ``1`` on error.
    """
    store = DotenvCredentialStore(settings.credentials_file)
    try:
        credentials = load_credentials(store)
    except CredentialError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    logger.info("Loaded credentials for %s", credentials.phone_number)

    extractor = StructuredExtractor(
        GeminiLanguageModel(credentials.api_key, model=settings.gemini_model)
    )
    event_store = JsonlEventStore(settings.events_file) if settings.events_file else None

    print("Please scan the QR code in the WhatsApp Web interface.")
    print("Waiting for WhatsApp Web to load...")

    stop = threading.Event()
    try:
        with open_session(
            settings.chat_url,
            headless=settings.headless,
            profile_dir=settings.browser_profile_dir,
            login_wait_seconds=settings.login_wait_seconds,
        ) as driver:
            print(f"Listening for {TRIGGER} mentions...")
            watcher = MentionWatcher(
                driver,
                extractor,
                poll_interval=settings.poll_interval_seconds,
                selectors=settings.selectors,
                event_store=event_store,
                echo=print_event_record,
            )
            watcher.run(stop, max_cycles=max_cycles)
    except SessionFatalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        stop.set()
        logger.info("Interrupted, shutting down")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the chat-cal CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``
            when ``None`` (the normal case).

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    log_level = "DEBUG" if getattr(args, "verbose", False) else settings.log_level
    try:
        setup_logging(log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.command == "init":
        return _handle_init(settings)

    return _handle_run(settings, args.max_cycles)


if __name__ == "__main__":
    raise SystemExit(main())
