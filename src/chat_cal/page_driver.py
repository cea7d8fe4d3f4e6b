"""Chat page automation.

The watcher talks to the chat surface through the :class:`PageDriver`
protocol (navigate, read text, type text, click).
:class:`PlaywrightPageDriver` implements it with the synchronous
Playwright API, and :func:`open_session` launches Chromium, opens the chat
page and waits for the QR-code login.

Error mapping:

- Reading the latest message fails -> :class:`TransientReadError`.
- Typing or clicking fails -> :class:`PageDriverError`.
- Navigation fails, or the page has been closed -> :class:`SessionFatalError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from chat_cal.exceptions import PageDriverError, SessionFatalError, TransientReadError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5_000


@dataclass(frozen=True)
class ChatSelectors:
    """CSS selectors for the parts of the chat page the watcher uses.

    Attributes:
        message: Matches message text spans; the last match is the latest
            message.
        input: The message compose box.
        send: The send button.
    """

    message: str = 'span[dir="auto"]'
    input: str = 'div[title="Type a message"]'
    send: str = 'button[aria-label="Send"]'


class PageDriver(Protocol):
    """Capability set for reading and writing a chat web page."""

    def navigate(self, url: str) -> None: ...

    def read_text(self, selector: str) -> str: ...

    def send_keys(self, selector: str, text: str) -> None: ...

    def click(self, selector: str) -> None: ...


class PlaywrightPageDriver:
    """:class:`PageDriver` backed by a Playwright :class:`Page`.

    Args:
        page: An open Playwright page.
        timeout_ms: Per-action timeout in milliseconds.
    """

    def __init__(self, page: Page, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        self._page = page
        self._timeout_ms = timeout_ms

    def navigate(self, url: str) -> None:
        try:
            self._page.goto(url, timeout=self._timeout_ms * 6)
        except PlaywrightError as exc:
            raise SessionFatalError(f"Failed to navigate to {url}: {exc}") from exc

    def read_text(self, selector: str) -> str:
        """Return the inner text of the last element matching *selector*.

        Raises:
            TransientReadError: If nothing matches or the read fails.
            SessionFatalError: If the page has been closed.
        """
        self._ensure_open()
        try:
            locator = self._page.locator(selector)
            if locator.count() == 0:
                raise TransientReadError(f"No element matches {selector!r}")
            return locator.last.inner_text(timeout=self._timeout_ms)
        except PlaywrightError as exc:
            self._ensure_open()
            raise TransientReadError(f"Failed to read {selector!r}: {exc}") from exc

    def send_keys(self, selector: str, text: str) -> None:
        self._ensure_open()
        try:
            self._page.locator(selector).first.fill(text, timeout=self._timeout_ms)
        except PlaywrightError as exc:
            self._ensure_open()
            raise PageDriverError(f"Failed to type into {selector!r}: {exc}") from exc

    def click(self, selector: str) -> None:
        self._ensure_open()
        try:
            self._page.locator(selector).first.click(timeout=self._timeout_ms)
        except PlaywrightError as exc:
            self._ensure_open()
            raise PageDriverError(f"Failed to click {selector!r}: {exc}") from exc

    def _ensure_open(self) -> None:
        if self._page.is_closed():
            raise SessionFatalError("Chat page was closed")


@contextmanager
def open_session(
    url: str,
    *,
    headless: bool = False,
    profile_dir: Path | None = None,
    login_wait_seconds: float = 15.0,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> Iterator[PlaywrightPageDriver]:
    """Launch Chromium, open *url* and yield a driver for the page.

    After navigation the session waits *login_wait_seconds* so the operator
    can scan the QR code.  With *profile_dir* a persistent browser profile
    is used, which keeps the chat login across runs.

    Raises:
        SessionFatalError: If the browser cannot be launched or the page
            cannot be opened.
    """
    playwright: Playwright | None = None
    browser: Browser | None = None
    context: BrowserContext | None = None
    try:
        try:
            playwright = sync_playwright().start()
            if profile_dir is not None:
                context = playwright.chromium.launch_persistent_context(
                    str(profile_dir), headless=headless
                )
            else:
                browser = playwright.chromium.launch(headless=headless)
                context = browser.new_context()
            page = context.pages[0] if context.pages else context.new_page()
        except PlaywrightError as exc:
            raise SessionFatalError(f"Failed to launch browser: {exc}") from exc

        driver = PlaywrightPageDriver(page, timeout_ms=timeout_ms)
        driver.navigate(url)
        logger.info("Opened %s, waiting %.0f s for login", url, login_wait_seconds)
        try:
            page.wait_for_timeout(login_wait_seconds * 1000)
        except PlaywrightError as exc:
            raise SessionFatalError(f"Chat page lost while waiting for login: {exc}") from exc

        yield driver
    finally:
        _close_session(playwright, browser, context)


def _close_session(
    playwright: Playwright | None,
    browser: Browser | None,
    context: BrowserContext | None,
) -> None:
    """Tear down whatever part of the browser session was started."""
    for name, resource in (("context", context), ("browser", browser)):
        if resource is None:
            continue
        try:
            resource.close()
        except PlaywrightError as exc:
            logger.warning("Failed to close browser %s: %s", name, exc)
    if playwright is not None:
        playwright.stop()
