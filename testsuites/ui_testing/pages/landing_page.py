"""
================================================================================
Landing Page Object
================================================================================

Home page (`/`): hero, primary call-to-action, header navigation, footer.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure

from testsuites.ui_testing.framework.element_actions import (
    ElementActions,
    ElementInteractionError,
)
from testsuites.ui_testing.framework.locators import LocatorRegistry, load_registry


class LandingPage:
    """Landing page object."""

    URL_PATH = "/"

    def __init__(self, actions: ElementActions, registry: Optional[LocatorRegistry] = None):
        self.actions = actions
        self.locators = (registry or load_registry()).for_page("landing")

    @allure.step("Open landing page")
    def open(self) -> "LandingPage":
        self.actions.goto(self.URL_PATH)
        return self

    # ---------------------------------------------------------------- hero

    def is_hero_section_visible(self) -> bool:
        return (
            self.actions.is_displayed(self.locators["hero_section"])
            or self.actions.is_displayed(self.locators["hero_title"])
        )

    def get_hero_title(self) -> str:
        return self.actions.get_text(self.locators["hero_title"])

    def is_main_cta_visible(self) -> bool:
        return (
            self.actions.is_displayed(self.locators["get_started_cta"])
            or self.actions.is_displayed(self.locators["primary_cta"])
        )

    @allure.step("Click main call-to-action")
    def click_get_started_cta(self) -> None:
        """Click the "Get Started" CTA, or the primary CTA button when it is absent."""
        if self.actions.is_displayed(self.locators["get_started_cta"]):
            self.actions.click(self.locators["get_started_cta"])
        else:
            self.actions.click(self.locators["primary_cta"])
        self.actions.wait_for_url(lambda url: "/login" in url or "/wizard" in url)

    # ---------------------------------------------------------- navigation

    def is_navigation_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["nav_header"])

    def is_pricing_link_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["nav_pricing_link"])

    def is_blog_link_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["nav_blog_link"])

    def is_login_link_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["nav_login_link"])

    @allure.step("Click Pricing link")
    def click_pricing_link(self) -> None:
        self.actions.click(self.locators["nav_pricing_link"])
        self.actions.wait_for_url(lambda url: "/pricing" in url)

    @allure.step("Click Blog link")
    def click_blog_link(self) -> None:
        self.actions.click(self.locators["nav_blog_link"])
        self.actions.wait_for_url(lambda url: "/blog" in url)

    @allure.step("Click Login link")
    def click_login_link(self) -> None:
        self.actions.click(self.locators["nav_login_link"])
        self.actions.wait_for_url(lambda url: "/login" in url)

    # -------------------------------------------------------------- footer

    def is_footer_visible(self) -> bool:
        try:
            self.actions.scroll_into_view(self.locators["footer"])
        except ElementInteractionError:
            return False
        return self.actions.is_displayed(self.locators["footer"])

    def footer_link_count(self) -> int:
        return self.actions.count(self.locators["footer_links"])

    # ---------------------------------------------------------------- logo

    def is_logo_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["logo"])

    @allure.step("Click logo")
    def click_logo(self) -> None:
        self.actions.click(self.locators["logo"])
        self.actions.wait_for_page_load()

    def page_title_contains(self, text: str) -> bool:
        """Case-insensitive check on the document title."""
        return text.lower() in self.actions.title().lower()
