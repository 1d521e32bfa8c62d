"""
================================================================================
SEO Landing Page Object
================================================================================

One page object for every SEO landing route declared in `pages.yaml`
(group: seo), e.g. /ats-resume-checker, /ai-resume-builder,
/resume-templates, /resume-translator.

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


class SeoLandingPage:
    """SEO landing page object, bound to one route."""

    def __init__(
        self,
        actions: ElementActions,
        route: str,
        registry: Optional[LocatorRegistry] = None,
    ):
        registry = registry or load_registry()
        self.actions = actions
        self.spec: PageSpec = registry.page(route)
        self.locators = registry.for_page("seo")
        self.heading = registry.get("common", "page_heading")

    @property
    def name(self) -> str:
        return self.spec.name

    @allure.step("Open SEO landing page")
    def open(self) -> "SeoLandingPage":
        self.actions.goto(self.spec.path)
        return self

    def is_on_page(self) -> bool:
        return self.spec.matches_url(self.actions.current_url)

    def is_heading_displayed(self) -> bool:
        return self.actions.is_displayed(self.heading)

    def get_heading_text(self) -> str:
        return self.actions.get_text(self.heading)

    def is_content_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["page_content"])

    def is_cta_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["cta_button"])

    @allure.step("Click landing call-to-action")
    def click_cta(self) -> None:
        self.actions.click(self.locators["cta_button"])
        self.actions.wait_for_page_load()

    def are_template_cards_displayed(self) -> bool:
        return self.actions.count(self.locators["template_cards"]) > 0

    def is_features_visible(self) -> bool:
        return self.actions.count(self.locators["features_section"]) > 0

    def has_meta_title(self) -> bool:
        return bool(self.actions.title().strip())

    def has_meta_description(self) -> bool:
        description = self.actions.meta_content("description")
        return bool(description and description.strip())

    def has_open_graph_title(self) -> bool:
        og_title = self.actions.meta_property("og:title")
        return bool(og_title and og_title.strip())
