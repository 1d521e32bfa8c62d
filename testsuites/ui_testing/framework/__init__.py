"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based framework for the public-site E2E suite.

Components:
    - config: layered settings (property > environment > YAML > default)
    - locators: locator/page data tables loaded from YAML
    - element_actions: bounded waits, primitives and non-fatal checks
    - browser_manager: per-test browser session lifecycle
    - report_listener: timestamped HTML report + per-test log sections
    - log_config: Loguru setup

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserSession, SessionError, SessionState
from .config import ConfigurationError, Settings, load_settings
from .element_actions import (
    ElementActions,
    ElementInteractionError,
    ElementNotFoundError,
    ElementNotInteractableError,
)
from .locators import LocatorNotDefinedError, LocatorRegistry, LocatorSpec, PageSpec, load_registry

__all__ = [
    "BrowserSession",
    "SessionError",
    "SessionState",
    "ConfigurationError",
    "Settings",
    "load_settings",
    "ElementActions",
    "ElementInteractionError",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "LocatorNotDefinedError",
    "LocatorRegistry",
    "LocatorSpec",
    "PageSpec",
    "load_registry",
]
