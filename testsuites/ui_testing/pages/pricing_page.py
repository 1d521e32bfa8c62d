"""
================================================================================
Pricing Page Object
================================================================================

`/pricing`: plan cards, prices, plan CTAs and feature lists.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure

from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.locators import LocatorRegistry, load_registry


MIN_PRICING_CARDS = 2


class PricingPage:
    """Pricing page object."""

    URL_PATH = "/pricing"

    def __init__(self, actions: ElementActions, registry: Optional[LocatorRegistry] = None):
        self.actions = actions
        registry = registry or load_registry()
        self.locators = registry.for_page("pricing")
        self.heading = registry.get("common", "page_heading")

    @allure.step("Open pricing page")
    def open(self) -> "PricingPage":
        self.actions.goto(self.URL_PATH)
        return self

    def is_on_pricing_page(self) -> bool:
        return "/pricing" in self.actions.current_url

    def is_pricing_section_visible(self) -> bool:
        return self.actions.is_displayed(self.locators["pricing_section"])

    def get_pricing_cards_count(self) -> int:
        """Number of visible plan cards (0 when none render)."""
        return self.actions.count_visible(self.locators["pricing_cards"])

    def are_pricing_cards_displayed(self) -> bool:
        return self.get_pricing_cards_count() >= MIN_PRICING_CARDS

    def are_prices_visible(self) -> bool:
        """At least one element with a currency amount or "Free"."""
        return self.actions.count(self.locators["price_amounts"]) > 0

    def plan_title_count(self) -> int:
        return self.actions.count(self.locators["plan_titles"])

    def are_cta_buttons_visible(self) -> bool:
        return self.actions.count(self.locators["plan_cta_buttons"]) > 0

    def are_feature_lists_visible(self) -> bool:
        return self.actions.count(self.locators["feature_lists"]) > 0

    def get_page_heading(self) -> str:
        return self.actions.get_text(self.heading)
