# ================================================================================
# Element Actions Module
# ================================================================================
#
# Driver-interaction helper shared by every Page Object.
#
# Each operation takes a target (a LocatorSpec from the locator table, or a
# raw Playwright selector), blocks until the element satisfies a condition
# (attached / visible / clickable) within a bounded timeout, then performs a
# primitive: click, type, read text or attribute, scroll. A spec's selectors
# are combined with Locator.or_() so one Playwright wait covers all of them.
#
# Key Features:
#   - Playwright auto-waits bounded by one timeout per operation
#   - Primary + fallback selectors, first satisfied selector wins
#   - Non-fatal checks (is_displayed / is_enabled / is_present / count)
#   - Allure step integration and Loguru logging
#
# No retries: an interaction that fails after its wait is reported as-is.
#
# ================================================================================

from __future__ import annotations

import time
from typing import Callable, List, Optional, Tuple, Union

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page, expect
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .locators import LocatorSpec


Target = Union[str, LocatorSpec]

ATTACHED = "attached"
VISIBLE = "visible"
CLICKABLE = "clickable"

MOBILE_VIEWPORT = (375, 812)
DESKTOP_VIEWPORT = (1920, 1080)


class ElementInteractionError(Exception):
    """Base class for element lookup and interaction failures."""

    def __init__(self, message: str, target: Optional[LocatorSpec] = None):
        super().__init__(message)
        self.target = target


class ElementNotFoundError(ElementInteractionError):
    """No selector of the target reached the required state within the timeout."""
    pass


class ElementNotInteractableError(ElementInteractionError):
    """The element is present and visible but cannot be interacted with."""
    pass


def as_spec(target: Target) -> LocatorSpec:
    """Normalize a raw selector or LocatorSpec into a LocatorSpec."""
    if isinstance(target, LocatorSpec):
        return target
    return LocatorSpec.of(target)


class ElementActions:
    """
    Blocking element interactions over a Playwright page.

    Waits are Playwright's own (locator.wait_for, expect, page.wait_for_url)
    and Playwright timeouts surface as ElementInteractionError subclasses.
    Timeouts are in seconds.

    Example:
        actions = ElementActions(page, base_url="https://getquickresume.com")
        actions.goto("/pricing")
        actions.click(registry.get("landing", "nav_pricing_link"))
        if actions.is_displayed("footer"):
            ...
    """

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        default_timeout: float = 10,
        page_load_timeout: float = 30,
    ):
        """
        Args:
            page: Playwright Page object
            base_url: Site root that relative paths are joined onto
            default_timeout: Ceiling for element waits, in seconds
            page_load_timeout: Ceiling for navigations, in seconds
        """
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.default_timeout = default_timeout
        self.page_load_timeout = page_load_timeout

    @classmethod
    def from_settings(cls, page: Page, settings) -> "ElementActions":
        return cls(
            page,
            base_url=settings.base_url,
            default_timeout=settings.default_timeout,
            page_load_timeout=settings.page_load_timeout,
        )

    # =========================================================================
    # Navigation
    # =========================================================================

    def goto(self, path: str) -> None:
        """Navigate to a site-relative path and wait for the document to load."""
        if not path.startswith("/"):
            path = f"/{path}"
        url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            logger.info(f"Navigating to: {url}")
            self.page.goto(url, wait_until="load", timeout=self.page_load_timeout * 1000)
            self.wait_for_page_load()

    def wait_for_page_load(self, timeout: Optional[float] = None) -> None:
        """Wait until document.readyState is "complete"."""
        timeout = self.page_load_timeout if timeout is None else timeout
        self.page.wait_for_load_state("load", timeout=timeout * 1000)

    @property
    def current_url(self) -> str:
        return self.page.url or ""

    def title(self) -> str:
        return self.page.title() or ""

    def wait_for_url(
        self,
        predicate: Callable[[str], bool],
        timeout: Optional[float] = None,
    ) -> bool:
        """
        Wait until `predicate` holds for the page URL.

        Returns:
            True if the predicate held before the timeout
        """
        try:
            self.page.wait_for_url(predicate, timeout=self._budget_ms(timeout))
            return True
        except PlaywrightTimeoutError:
            return False

    # =========================================================================
    # Resolution
    # =========================================================================

    def _budget_ms(self, timeout: Optional[float]) -> int:
        """Timeout in milliseconds; Playwright reads 0 as "wait forever"."""
        timeout = self.default_timeout if timeout is None else timeout
        return max(1, round(timeout * 1000))

    @staticmethod
    def _remaining_ms(deadline: float) -> float:
        return max(1, (deadline - time.monotonic()) * 1000)

    def _combined(self, spec: LocatorSpec) -> Locator:
        """One locator matching any of the spec's selectors."""
        locator = self.page.locator(spec.primary)
        for selector in spec.fallbacks:
            locator = locator.or_(self.page.locator(selector))
        return locator

    def _resolve(self, spec: LocatorSpec, state: str) -> Optional[Tuple[str, Locator]]:
        """First selector, in declared order, whose first match is in `state`."""
        for selector in spec.selectors:
            locator = self.page.locator(selector).first
            try:
                if state == ATTACHED and self.page.locator(selector).count() > 0:
                    return selector, locator
                if state != ATTACHED and locator.is_visible():
                    return selector, locator
            except PlaywrightError:
                continue
        return None

    def wait_for(
        self,
        target: Target,
        state: str = VISIBLE,
        timeout: Optional[float] = None,
    ) -> Locator:
        """
        Block until the target reaches `state` and return its first match.

        Args:
            target: LocatorSpec or raw selector
            state: "attached", "visible" or "clickable"
            timeout: Ceiling in seconds (defaults to the configured timeout)

        Raises:
            ElementNotFoundError: No selector reached the state
            ElementNotInteractableError: Visible but never became enabled
        """
        spec = as_spec(target)
        budget = self._budget_ms(timeout)
        deadline = time.monotonic() + budget / 1000

        logger.debug(f"Waiting for {spec.description} to be {state}")
        wait_state = "attached" if state == ATTACHED else "visible"
        try:
            self._combined(spec).first.wait_for(state=wait_state, timeout=budget)
            found = self._resolve(spec, state)
        except PlaywrightError:
            found = None
        if not found:
            message = (
                f"Element '{spec.description}' not {state} within "
                f"{budget / 1000:g}s (tried: {', '.join(spec.selectors)})"
            )
            logger.debug(message)
            raise ElementNotFoundError(message, spec)

        selector, locator = found
        if state == CLICKABLE:
            try:
                expect(locator).to_be_enabled(timeout=self._remaining_ms(deadline))
            except AssertionError as e:
                message = f"Element '{spec.description}' is visible but not enabled"
                logger.debug(message)
                raise ElementNotInteractableError(message, spec) from e

        if selector != spec.primary:
            logger.warning(
                f"Element '{spec.description}' used fallback selector: {selector}"
            )
        return locator

    def wait_for_all(self, target: Target, timeout: Optional[float] = None) -> List[Locator]:
        """
        Block until at least one selector has matches that are all visible.

        Raises:
            ElementNotFoundError: When no selector satisfies the condition
        """
        spec = as_spec(target)
        self.wait_for(spec, VISIBLE, timeout)
        for selector in spec.selectors:
            matches = self.page.locator(selector)
            try:
                total = matches.count()
                if total and all(matches.nth(i).is_visible() for i in range(total)):
                    return [matches.nth(i) for i in range(total)]
            except PlaywrightError:
                continue
        raise ElementNotFoundError(
            f"No visible elements for '{spec.description}'", spec
        )

    # =========================================================================
    # Primitives
    # =========================================================================

    def click(self, target: Target, timeout: Optional[float] = None) -> None:
        """Click once the element is clickable; the wait and the click share one timeout."""
        spec = as_spec(target)
        deadline = time.monotonic() + self._budget_ms(timeout) / 1000
        with allure.step(f"Click: {spec.description}"):
            locator = self.wait_for(spec, CLICKABLE, timeout)
            logger.info(f"Clicking: {spec.description}")
            try:
                locator.click(timeout=self._remaining_ms(deadline))
            except PlaywrightError as e:
                raise ElementNotInteractableError(
                    f"Click on '{spec.description}' failed: {e}", spec
                ) from e

    def js_click(self, target: Target, timeout: Optional[float] = None) -> None:
        """Click through the DOM for elements that reject pointer clicks."""
        spec = as_spec(target)
        with allure.step(f"JS click: {spec.description}"):
            locator = self.wait_for(spec, VISIBLE, timeout)
            locator.evaluate("el => el.click()")

    def type_text(self, target: Target, text: str, timeout: Optional[float] = None) -> None:
        """Clear an input and type `text` into it."""
        spec = as_spec(target)
        with allure.step(f"Type into {spec.description}"):
            locator = self.wait_for(spec, VISIBLE, timeout)
            locator.fill("")
            locator.fill(text)

    def get_text(self, target: Target, timeout: Optional[float] = None) -> str:
        """Visible text of the element, stripped."""
        spec = as_spec(target)
        locator = self.wait_for(spec, VISIBLE, timeout)
        text = (locator.inner_text() or "").strip()
        logger.debug(f"Got text from {spec.description}: '{text}'")
        return text

    def get_attribute(
        self,
        target: Target,
        attribute: str,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        spec = as_spec(target)
        locator = self.wait_for(spec, VISIBLE, timeout)
        return locator.get_attribute(attribute)

    def scroll_into_view(self, target: Target, timeout: Optional[float] = None) -> None:
        spec = as_spec(target)
        with allure.step(f"Scroll to: {spec.description}"):
            locator = self.wait_for(spec, ATTACHED, timeout)
            locator.scroll_into_view_if_needed()

    # =========================================================================
    # Checks (never raise on absent elements)
    # =========================================================================

    def is_displayed(self, target: Target, timeout: Optional[float] = None) -> bool:
        try:
            self.wait_for(target, VISIBLE, timeout)
            return True
        except ElementInteractionError:
            return False

    def is_enabled(self, target: Target, timeout: Optional[float] = None) -> bool:
        try:
            self.wait_for(target, CLICKABLE, timeout)
            return True
        except ElementInteractionError:
            return False

    def is_present(self, target: Target) -> bool:
        """Check presence in the DOM without waiting."""
        return self.count(target, timeout=0) > 0

    def count(self, target: Target, timeout: Optional[float] = None) -> int:
        """
        Number of matches for the first selector that has any.

        Waits up to `timeout` for something to attach; returns 0 otherwise.
        A timeout of 0 counts without waiting.
        """
        spec = as_spec(target)
        if timeout != 0:
            try:
                self._combined(spec).first.wait_for(
                    state="attached", timeout=self._budget_ms(timeout)
                )
            except PlaywrightError:
                return 0

        for selector in spec.selectors:
            try:
                total = self.page.locator(selector).count()
            except PlaywrightError:
                continue
            if total:
                return total
        return 0

    def count_visible(self, target: Target, timeout: Optional[float] = None) -> int:
        try:
            return len(self.wait_for_all(target, timeout))
        except ElementInteractionError:
            return 0

    # =========================================================================
    # Document helpers
    # =========================================================================

    def meta_content(self, name: str) -> Optional[str]:
        """Content of <meta name=...>, or None when the tag is missing."""
        return self._meta(f"meta[name='{name}']")

    def meta_property(self, prop: str) -> Optional[str]:
        """Content of <meta property=...> (Open Graph), or None."""
        return self._meta(f"meta[property='{prop}']")

    def _meta(self, selector: str) -> Optional[str]:
        tags = self.page.locator(selector)
        if tags.count() == 0:
            return None
        return tags.first.get_attribute("content")

    def set_viewport(self, width: int, height: int) -> None:
        with allure.step(f"Set viewport {width}x{height}"):
            self.page.set_viewport_size({"width": width, "height": height})

    def take_screenshot(self, name: str, full_page: bool = True) -> bytes:
        screenshot = self.page.screenshot(full_page=full_page)
        allure.attach(
            screenshot,
            name=name,
            attachment_type=allure.attachment_type.PNG,
        )
        return screenshot


__all__ = [
    "ElementActions",
    "ElementInteractionError",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "Target",
    "as_spec",
    "ATTACHED",
    "VISIBLE",
    "CLICKABLE",
    "MOBILE_VIEWPORT",
    "DESKTOP_VIEWPORT",
]
