"""
================================================================================
Browser Manager
================================================================================

Per-test browser session lifecycle for UI automation.

States:
    UNINITIALIZED -> ACTIVE   open(): start Playwright, acquire the browser
                              (remote connect or local launch), new context
                              and page, apply timeouts and viewport
    ACTIVE        -> CLOSED   close(): always, including after a failed test

Every test owns exactly one session; sessions are never pooled or shared.
Acquisition failure is not retried: it raises SessionError for that test
after releasing whatever was already acquired.

Remote endpoints:
    ws:// | wss://      Playwright server   (BrowserType.connect)
    http:// | https://  Chromium DevTools   (BrowserType.connect_over_cdp)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Dict, Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .config import Settings


class SessionError(Exception):
    """Raised when a browser session cannot be acquired or is misused."""
    pass


class SessionState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    CLOSED = "closed"


class BrowserSession:
    """
    One exclusive browser session for one test.

    Usage:
        with BrowserSession(settings) as session:
            session.page.goto("https://getquickresume.com")
    """

    # Local launch arguments
    DEFAULT_LAUNCH_ARGS = [
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--disable-extensions",
        "--disable-infobars",
    ]

    def __init__(
        self,
        settings: Settings,
        playwright_factory: Optional[Callable[[], Any]] = None,
    ):
        """
        Args:
            settings: Run settings (endpoint, browser, timeouts, viewport)
            playwright_factory: Returns an object with `start()`; defaults to sync_playwright
        """
        self.settings = settings
        self._playwright_factory = playwright_factory or sync_playwright
        self.state = SessionState.UNINITIALIZED

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def __enter__(self) -> "BrowserSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def page(self) -> Page:
        if self.state is not SessionState.ACTIVE or self._page is None:
            raise SessionError(f"No active page (session is {self.state.value})")
        return self._page

    @property
    def context(self) -> Optional[BrowserContext]:
        return self._context

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def open(self) -> Page:
        """Acquire browser, context and page. Valid only once, from UNINITIALIZED."""
        if self.state is not SessionState.UNINITIALIZED:
            raise SessionError(f"Cannot open a session that is {self.state.value}")

        try:
            self._playwright = self._playwright_factory().start()
            self._browser = self._acquire_browser()
            self._context = self._browser.new_context(**self._context_options())
            self._context.set_default_timeout(self.settings.default_timeout_ms)
            self._context.set_default_navigation_timeout(self.settings.page_load_timeout_ms)
            self._page = self._context.new_page()
        except SessionError:
            self._release()
            self.state = SessionState.CLOSED
            raise
        except (PlaywrightError, OSError) as e:
            logger.error(f"Browser session acquisition failed: {e}")
            self._release()
            self.state = SessionState.CLOSED
            raise SessionError(f"Could not start browser session: {e}") from e

        self.state = SessionState.ACTIVE
        logger.debug(
            f"Session active: {self.settings.browser} "
            f"({'remote ' + self.settings.remote_url if self.settings.is_remote else 'local'})"
        )
        return self._page

    def close(self) -> None:
        """Release everything. Safe to call in any state, any number of times."""
        if self.state is SessionState.CLOSED:
            return
        self._release()
        self.state = SessionState.CLOSED
        logger.debug("Session closed")

    def _acquire_browser(self) -> Browser:
        launcher = getattr(self._playwright, self.settings.browser)
        remote_url = self.settings.remote_url

        if remote_url.startswith(("ws://", "wss://")):
            logger.info(f"Connecting to Playwright server: {remote_url}")
            return launcher.connect(remote_url, timeout=self.settings.page_load_timeout_ms)

        if remote_url.startswith(("http://", "https://")):
            logger.info(f"Connecting over CDP: {remote_url}")
            return launcher.connect_over_cdp(remote_url, timeout=self.settings.page_load_timeout_ms)

        if remote_url:
            raise SessionError(f"Unsupported remote browser URL: {remote_url}")

        return launcher.launch(
            headless=self.settings.headless,
            args=list(self.DEFAULT_LAUNCH_ARGS),
        )

    def _context_options(self) -> Dict[str, Any]:
        width, height = self.settings.window_size
        return {
            "viewport": {"width": width, "height": height},
            "ignore_https_errors": True,
        }

    def _release(self) -> None:
        # Release in reverse order of acquisition; each step is independent.
        for name, resource, method in (
            ("page", self._page, "close"),
            ("context", self._context, "close"),
            ("browser", self._browser, "close"),
            ("playwright", self._playwright, "stop"),
        ):
            if resource is None:
                continue
            try:
                getattr(resource, method)()
            except PlaywrightError as e:
                logger.warning(f"Failed to release {name}: {e}")

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None


__all__ = [
    "BrowserSession",
    "SessionError",
    "SessionState",
]
