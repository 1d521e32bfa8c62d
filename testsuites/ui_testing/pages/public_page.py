"""
================================================================================
Public Page Object
================================================================================

Generic page object for simple public routes declared in `pages.yaml`
(group: public): legal pages, contact, about.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure

from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.locators import (
    LocatorRegistry,
    PageSpec,
    load_registry,
)


class PublicPage:
    """Public route page object."""

    def __init__(
        self,
        actions: ElementActions,
        route: str,
        registry: Optional[LocatorRegistry] = None,
    ):
        self.actions = actions
        self.spec: PageSpec = (registry or load_registry()).page(route)

    @allure.step("Open public page")
    def open(self) -> "PublicPage":
        self.actions.goto(self.spec.path)
        return self

    def is_on_page(self) -> bool:
        return self.spec.matches_url(self.actions.current_url)

    def has_title(self) -> bool:
        return bool(self.actions.title().strip())
