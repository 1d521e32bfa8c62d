"""
================================================================================
Login Page Object
================================================================================

`/login`: Google OAuth entry point, heading, legal links and the way back
to the home page.

NOTE:
  Authentication itself is not exercised; the suite only validates the
  public UI of the login screen.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure

from testsuites.ui_testing.framework.element_actions import (
    DESKTOP_VIEWPORT,
    MOBILE_VIEWPORT,
    ElementActions,
)
from testsuites.ui_testing.framework.locators import LocatorRegistry, load_registry


class LoginPage:
    """Login page object."""

    URL_PATH = "/login"

    def __init__(self, actions: ElementActions, registry: Optional[LocatorRegistry] = None):
        self.actions = actions
        self.locators = (registry or load_registry()).for_page("login")

    @allure.step("Open login page")
    def open(self) -> "LoginPage":
        self.actions.goto(self.URL_PATH)
        return self

    def is_on_login_page(self) -> bool:
        return "/login" in self.actions.current_url

    # --------------------------------------------------------------- OAuth

    def is_google_login_button_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["google_login_button"])

    def is_google_login_button_enabled(self) -> bool:
        return self.actions.is_enabled(self.locators["google_login_button"])

    # ------------------------------------------------------------- content

    def get_page_heading(self) -> str:
        return self.actions.get_text(self.locators["page_heading"])

    def is_login_container_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["login_container"])

    def is_terms_link_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["terms_link"])

    def is_privacy_link_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["privacy_link"])

    # ---------------------------------------------------------- navigation

    def is_back_to_home_link_visible(self) -> bool:
        return (
            self.actions.is_displayed(self.locators["back_to_home_link"])
            or self.actions.is_displayed(self.locators["logo_link"])
        )

    @allure.step("Navigate back to home")
    def click_back_to_home(self) -> None:
        """Home/Back link when present, otherwise the logo."""
        if self.actions.is_displayed(self.locators["back_to_home_link"]):
            self.actions.click(self.locators["back_to_home_link"])
        else:
            self.actions.click(self.locators["logo_link"])
        self.actions.wait_for_url(lambda url: "/login" not in url)
        self.actions.wait_for_page_load()

    # ---------------------------------------------------------- responsive

    @allure.step("Verify mobile layout")
    def verify_mobile_layout(self) -> bool:
        """
        Switch to a phone-sized viewport, check the container and the Google
        button, then restore the desktop viewport.
        """
        self.actions.set_viewport(*MOBILE_VIEWPORT)
        try:
            self.actions.wait_for_page_load()
            has_container = self.is_login_container_visible()
            has_google_button = self.is_google_login_button_visible()
        finally:
            self.actions.set_viewport(*DESKTOP_VIEWPORT)
        return has_container and has_google_button
