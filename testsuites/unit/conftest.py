"""
Offline doubles for the Playwright sync API.

The fakes model only what the framework touches: a page holding elements by
selector, locators over those elements, and the playwright -> browser type ->
browser -> context -> page chain used by BrowserSession.
"""

from typing import Dict, List, Optional

import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.config import Settings
from testsuites.ui_testing.framework import element_actions
from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.locators import LocatorRegistry, load_registry


# ================================================================================
# Page doubles
# ================================================================================

class FakeElement:
    def __init__(self, text="", visible=True, enabled=True, attrs=None,
                 navigates_to=None, click_error=None):
        self.text = text
        self.visible = visible
        self.enabled = enabled
        self.attrs = dict(attrs or {})
        self.navigates_to = navigates_to
        self.click_error = click_error
        self.clicks = 0
        self.click_timeouts: List[float] = []
        self.enabled_timeouts: List[float] = []
        self.value = ""
        self.scrolled = False


class FakeLocator:
    """Matches every element of its selectors, in selector order; waits never sleep."""

    def __init__(self, page: "FakePage", selectors, index: Optional[int] = None):
        self._page = page
        self._selectors = (selectors,) if isinstance(selectors, str) else tuple(selectors)
        self._index = index

    def _matches(self) -> List[FakeElement]:
        found: List[FakeElement] = []
        for selector in self._selectors:
            found.extend(self._page.elements.get(selector, []))
        return found

    def _element(self) -> Optional[FakeElement]:
        matches = self._matches()
        index = self._index or 0
        return matches[index] if index < len(matches) else None

    def _require(self) -> FakeElement:
        element = self._element()
        if element is None:
            raise PlaywrightError(f"Timeout waiting for {' | '.join(self._selectors)}")
        return element

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._page, self._selectors, 0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self._page, self._selectors, index)

    def or_(self, other: "FakeLocator") -> "FakeLocator":
        return FakeLocator(self._page, self._selectors + other._selectors)

    def wait_for(self, state="visible", timeout=None) -> None:
        self._page.waits.append((state, timeout))
        element = self._element()
        if element is None or (state == "visible" and not element.visible):
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for {' | '.join(self._selectors)} to be {state}"
            )

    def count(self) -> int:
        return len(self._matches())

    def is_visible(self) -> bool:
        element = self._element()
        return bool(element and element.visible)

    def is_enabled(self) -> bool:
        return self._require().enabled

    def click(self, timeout=None) -> None:
        element = self._require()
        element.click_timeouts.append(timeout)
        if element.click_error:
            raise PlaywrightError(element.click_error)
        element.clicks += 1
        if element.navigates_to:
            self._page.url = element.navigates_to

    def evaluate(self, expression: str):
        element = self._require()
        element.clicks += 1

    def inner_text(self) -> str:
        return self._require().text

    def get_attribute(self, name: str) -> Optional[str]:
        return self._require().attrs.get(name)

    def fill(self, value: str) -> None:
        self._require().value = value

    def scroll_into_view_if_needed(self) -> None:
        self._require().scrolled = True


class FakeLocatorAssertions:
    """Stands in for `expect(locator)`; checks once instead of retrying."""

    def __init__(self, locator: FakeLocator):
        self._locator = locator

    def to_be_enabled(self, timeout=None) -> None:
        element = self._locator._require()
        element.enabled_timeouts.append(timeout)
        if not element.enabled:
            raise AssertionError(f"Locator expected to be enabled (timeout {timeout}ms)")


class FakePage:
    def __init__(self, elements: Optional[Dict[str, List[FakeElement]]] = None,
                 title: str = "", redirects: Optional[Dict[str, str]] = None):
        self.elements = dict(elements or {})
        self.url = "about:blank"
        self.page_title = title
        self.redirects = dict(redirects or {})
        self.visits: List[str] = []
        self.viewports: List[Dict[str, int]] = []
        self.waits: List[tuple] = []
        self.closed = False

    def add(self, selector: str, *elements: FakeElement) -> None:
        self.elements.setdefault(selector, []).extend(elements)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def goto(self, url: str, wait_until=None, timeout=None) -> None:
        self.visits.append(url)
        self.url = self.redirects.get(url, url)

    def wait_for_load_state(self, state=None, timeout=None) -> None:
        pass

    def wait_for_url(self, url, timeout=None) -> None:
        self.waits.append(("url", timeout))
        if not url(self.url):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for URL")

    def title(self) -> str:
        return self.page_title

    def set_viewport_size(self, size: Dict[str, int]) -> None:
        self.viewports.append(dict(size))

    def screenshot(self, full_page=False) -> bytes:
        return b"\x89PNG"

    def close(self) -> None:
        self.closed = True


# ================================================================================
# Session doubles
# ================================================================================

class FakeContext:
    def __init__(self, options):
        self.options = options
        self.default_timeout = None
        self.navigation_timeout = None
        self.page = FakePage()
        self.closed = 0

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    def new_page(self):
        return self.page

    def close(self):
        self.closed += 1


class FakeBrowser:
    def __init__(self):
        self.contexts: List[FakeContext] = []
        self.closed = 0

    def new_context(self, **options):
        context = FakeContext(options)
        self.contexts.append(context)
        return context

    def close(self):
        self.closed += 1


class FakeBrowserType:
    def __init__(self, fail_with: Optional[str] = None):
        self.calls: List[tuple] = []
        self.browser = FakeBrowser()
        self.fail_with = fail_with

    def _acquire(self, how, *args, **kwargs):
        self.calls.append((how, args, kwargs))
        if self.fail_with:
            raise PlaywrightError(self.fail_with)
        return self.browser

    def launch(self, **kwargs):
        return self._acquire("launch", **kwargs)

    def connect(self, url, **kwargs):
        return self._acquire("connect", url, **kwargs)

    def connect_over_cdp(self, url, **kwargs):
        return self._acquire("connect_over_cdp", url, **kwargs)


class FakePlaywright:
    def __init__(self, fail_with: Optional[str] = None):
        self.chromium = FakeBrowserType(fail_with)
        self.firefox = FakeBrowserType(fail_with)
        self.webkit = FakeBrowserType(fail_with)
        self.stopped = 0

    def stop(self):
        self.stopped += 1


class FakePlaywrightFactory:
    """Stands in for `sync_playwright`: calling it returns a starter."""

    def __init__(self, fail_with: Optional[str] = None):
        self.playwright = FakePlaywright(fail_with)

    def __call__(self):
        return self

    def start(self):
        return self.playwright


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fast_actions(fake_page: FakePage, monkeypatch) -> ElementActions:
    """ElementActions over the fake page with sub-second waits."""
    monkeypatch.setattr(element_actions, "expect", FakeLocatorAssertions)
    return ElementActions(
        fake_page,
        base_url="https://site.test/",
        default_timeout=0.05,
        page_load_timeout=1,
    )


@pytest.fixture
def registry() -> LocatorRegistry:
    return load_registry()


@pytest.fixture
def element():
    return FakeElement


@pytest.fixture
def playwright_factory():
    return FakePlaywrightFactory


@pytest.fixture
def local_settings() -> Settings:
    return Settings(base_url="https://site.test", default_timeout=5, page_load_timeout=20)


@pytest.fixture
def log_messages():
    """Loguru records at WARNING and above emitted during the test."""
    messages: List[str] = []
    sink_id = logger.add(lambda message: messages.append(str(message)), level="WARNING",
                         format="{message}")
    yield messages
    logger.remove(sink_id)
