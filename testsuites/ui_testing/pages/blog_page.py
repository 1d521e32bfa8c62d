"""
================================================================================
Blog Page Object
================================================================================

Blog listing (`/blog`) and individual articles (`/blog/<slug>`).

================================================================================
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

import allure
from loguru import logger

from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.locators import LocatorRegistry, load_registry


LISTING_PATH = "/blog"
DEFAULT_ARTICLE_SLUG = "how-to-make-good-resume"


class BlogPage:
    """Blog listing + article page object."""

    URL_PATH = LISTING_PATH

    def __init__(self, actions: ElementActions, registry: Optional[LocatorRegistry] = None):
        self.actions = actions
        registry = registry or load_registry()
        self.locators = registry.for_page("blog")
        self.heading = registry.get("common", "page_heading")

    @allure.step("Open blog listing")
    def open(self) -> "BlogPage":
        self.actions.goto(self.URL_PATH)
        return self

    @allure.step("Open blog article: {slug}")
    def open_article(self, slug: str = DEFAULT_ARTICLE_SLUG) -> "BlogPage":
        self.actions.goto(f"{LISTING_PATH}/{slug}")
        return self

    def open_any_article(self) -> "BlogPage":
        """Open the first listed article, or the default slug when the listing is empty."""
        self.open()
        if self.are_article_cards_displayed():
            self.click_first_article()
        else:
            self.open_article(DEFAULT_ARTICLE_SLUG)
        return self

    # ------------------------------------------------------------- listing

    def get_article_cards_count(self) -> int:
        """Article cards on the listing, falling back to plain article links."""
        cards = self.actions.count(self.locators["article_cards"])
        if cards == 0:
            cards = self.actions.count(self.locators["article_links"], timeout=0)
        return cards

    def are_article_cards_displayed(self) -> bool:
        return self.get_article_cards_count() > 0

    @allure.step("Click first article")
    def click_first_article(self) -> None:
        if self.actions.count(self.locators["article_links"]) == 0:
            logger.warning("No article links on the blog listing")
            return
        self.actions.click(self.locators["article_links"])
        self.actions.wait_for_url(lambda url: self._is_article_url(url))
        self.actions.wait_for_page_load()

    def get_blog_heading(self) -> str:
        return self.actions.get_text(self.heading)

    # ------------------------------------------------------------- article

    def is_article_title_displayed(self) -> bool:
        return self.actions.is_displayed(self.locators["article_title"])

    def get_article_title(self) -> str:
        return self.actions.get_text(self.locators["article_title"])

    def is_article_content_displayed(self) -> bool:
        return self.actions.is_displayed(self.locators["article_content"])

    def has_article_cta(self) -> bool:
        return self.actions.count(self.locators["article_cta"]) > 0

    def has_article_date(self) -> bool:
        return self.actions.count(self.locators["article_date"], timeout=0) > 0

    def has_article_author(self) -> bool:
        return self.actions.count(self.locators["article_author"], timeout=0) > 0

    # ---------------------------------------------------------- navigation

    def is_back_to_blog_visible(self) -> bool:
        return (
            self.actions.is_displayed(self.locators["back_to_blog_link"])
            or self.actions.is_displayed(self.locators["breadcrumb_blog"])
        )

    @allure.step("Navigate back to blog")
    def click_back_to_blog(self) -> None:
        """Back link, else breadcrumb, else open the listing directly."""
        if self.actions.is_displayed(self.locators["back_to_blog_link"]):
            self.actions.click(self.locators["back_to_blog_link"])
        elif self.actions.is_displayed(self.locators["breadcrumb_blog"]):
            self.actions.click(self.locators["breadcrumb_blog"])
        else:
            self.open()
            return
        self.actions.wait_for_url(lambda url: self._is_listing_url(url))
        self.actions.wait_for_page_load()

    def is_on_blog_listing_page(self) -> bool:
        return self._is_listing_url(self.actions.current_url)

    def is_on_article_page(self) -> bool:
        return self._is_article_url(self.actions.current_url)

    @staticmethod
    def _is_listing_url(url: str) -> bool:
        path = urlparse(url).path
        return path.endswith("/blog") or path.endswith("/blog/")

    @classmethod
    def _is_article_url(cls, url: str) -> bool:
        return "/blog/" in urlparse(url).path and not cls._is_listing_url(url)
