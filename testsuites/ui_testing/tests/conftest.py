"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for the live UI tests, providing fixtures for
browser session lifecycle, page objects, and failure capture.

Key Features:
- One exclusive browser session per test, always released
- Page Object fixtures built around a shared ElementActions helper
- Screenshot + URL attached to Allure on failure
- Per-test logger with explicit test context for soft checks

================================================================================
"""

from typing import Generator

import allure
import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.browser_manager import BrowserSession
from testsuites.ui_testing.framework.config import Settings
from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.locators import LocatorRegistry, load_registry
from testsuites.ui_testing.framework.log_config import bound_logger
from testsuites.ui_testing.pages.blog_page import BlogPage
from testsuites.ui_testing.pages.landing_page import LandingPage
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.pricing_page import PricingPage


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def registry() -> LocatorRegistry:
    """Locator and page tables, loaded once."""
    return load_registry()


@pytest.fixture(scope="function")
def browser_session(settings: Settings) -> Generator[BrowserSession, None, None]:
    """
    Function-scoped browser session.

    Opened before the test and closed after it, whatever the outcome.
    """
    session = BrowserSession(settings)
    session.open()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def actions(browser_session: BrowserSession, settings: Settings) -> ElementActions:
    """Driver-interaction helper bound to this test's page."""
    return ElementActions.from_settings(browser_session.page, settings)


@pytest.fixture
def check_log(request):
    """Logger bound to the running test, used by soft checks."""
    return bound_logger(request.node.nodeid)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def landing_page(actions: ElementActions, registry: LocatorRegistry) -> LandingPage:
    return LandingPage(actions, registry)


@pytest.fixture
def pricing_page(actions: ElementActions, registry: LocatorRegistry) -> PricingPage:
    return PricingPage(actions, registry)


@pytest.fixture
def blog_page(actions: ElementActions, registry: LocatorRegistry) -> BlogPage:
    return BlogPage(actions, registry)


@pytest.fixture
def login_page(actions: ElementActions, registry: LocatorRegistry) -> LoginPage:
    return LoginPage(actions, registry)


# SEO and public route page objects are built per route inside the
# parametrized tests.


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture a screenshot and the current URL when a UI test fails.

    Runs before the session fixture is torn down, so the page is still open.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    session = getattr(item, "funcargs", {}).get("browser_session")
    if session is None or not session.is_active:
        return

    try:
        page = session.page
        allure.attach(
            page.screenshot(full_page=True),
            name="failure_screenshot",
            attachment_type=allure.attachment_type.PNG,
        )
        allure.attach(
            page.url,
            name="Current URL",
            attachment_type=allure.attachment_type.TEXT,
        )
    except PlaywrightError as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
