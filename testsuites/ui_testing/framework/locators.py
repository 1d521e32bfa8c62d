"""
================================================================================
Locator Registry
================================================================================

Data-driven element and page definitions for the public-site Page Objects.

Locators are declared once in `testsuites/ui_testing/data/locators.yaml`
(page -> element name -> selectors + label) and page routes in
`testsuites/ui_testing/data/pages.yaml`. Both files are loaded once per
process and exposed as immutable objects.

Selector priority inside a LocatorSpec:
    1. data-testid (stable test hook)
    2. Structural / text fallbacks (logged as maintenance candidates)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from loguru import logger


DATA_DIR = Path(__file__).parent.parent / "data"
LOCATORS_FILE = DATA_DIR / "locators.yaml"
PAGES_FILE = DATA_DIR / "pages.yaml"


class LocatorNotDefinedError(KeyError):
    """Raised when a page or element name is missing from the locator table."""
    pass


@dataclass(frozen=True)
class LocatorSpec:
    """
    One logical UI element.

    Attributes:
        name: Element key within its page (e.g. "nav_pricing_link")
        selectors: Ordered Playwright selectors, primary first
        label: Human-readable meaning used in logs and Allure steps
    """
    name: str
    selectors: Tuple[str, ...]
    label: str = ""

    def __post_init__(self) -> None:
        if not self.selectors:
            raise ValueError(f"Locator '{self.name}' has no selectors")

    @property
    def primary(self) -> str:
        return self.selectors[0]

    @property
    def fallbacks(self) -> Tuple[str, ...]:
        return self.selectors[1:]

    @property
    def description(self) -> str:
        return self.label or self.name

    @classmethod
    def of(cls, selector: str, label: str = "") -> "LocatorSpec":
        """Build a single-selector spec for one-off elements."""
        return cls(name=label or selector, selectors=(selector,), label=label)


@dataclass(frozen=True)
class PageSpec:
    """A public route of the site under test."""
    name: str
    path: str
    title: str = ""
    url_markers: Tuple[str, ...] = ()
    group: str = "public"
    expects: Tuple[str, ...] = ()
    requires_title: bool = True

    def matches_url(self, url: str) -> bool:
        """True when `url` contains any of this page's URL markers."""
        if not self.url_markers:
            return True
        return any(marker in url for marker in self.url_markers)


@dataclass
class LocatorRegistry:
    """
    Read-only view over the locator and page tables.

    Usage:
        >>> registry = load_registry()
        >>> registry.get("pricing", "pricing_cards").primary
        "[data-testid='pricing-card']"
    """
    locators: Dict[str, Dict[str, LocatorSpec]] = field(default_factory=dict)
    pages: Dict[str, PageSpec] = field(default_factory=dict)

    def get(self, page: str, name: str) -> LocatorSpec:
        """
        Look up a locator.

        Raises:
            LocatorNotDefinedError: When the page or element is not declared
        """
        try:
            return self.locators[page][name]
        except KeyError:
            raise LocatorNotDefinedError(f"No locator defined for {page}.{name}") from None

    def for_page(self, page: str) -> Dict[str, LocatorSpec]:
        if page not in self.locators:
            raise LocatorNotDefinedError(f"No locators defined for page: {page}")
        return dict(self.locators[page])

    def page(self, name: str) -> PageSpec:
        try:
            return self.pages[name]
        except KeyError:
            raise LocatorNotDefinedError(f"No page defined: {name}") from None

    def pages_in_group(self, group: str) -> List[PageSpec]:
        return [spec for spec in self.pages.values() if spec.group == group]

    def __iter__(self) -> Iterator[LocatorSpec]:
        for page_locators in self.locators.values():
            yield from page_locators.values()


# ================================================================================
# Loading
# ================================================================================

def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
    return content or {}


def parse_locators(data: Dict[str, Any]) -> Dict[str, Dict[str, LocatorSpec]]:
    """Convert the raw locator mapping into LocatorSpec objects."""
    table: Dict[str, Dict[str, LocatorSpec]] = {}
    for page, elements in data.items():
        table[page] = {}
        for name, entry in (elements or {}).items():
            selectors = entry.get("selectors") or []
            if isinstance(selectors, str):
                selectors = [selectors]
            table[page][name] = LocatorSpec(
                name=name,
                selectors=tuple(selectors),
                label=entry.get("label", ""),
            )
    return table


def parse_pages(data: Dict[str, Any]) -> Dict[str, PageSpec]:
    """Convert the raw page mapping into PageSpec objects."""
    pages: Dict[str, PageSpec] = {}
    for name, entry in (data.get("pages") or {}).items():
        pages[name] = PageSpec(
            name=name,
            path=entry["path"],
            title=entry.get("title", ""),
            url_markers=tuple(entry.get("url_markers") or ()),
            group=entry.get("group", "public"),
            expects=tuple(entry.get("expects") or ()),
            requires_title=bool(entry.get("requires_title", True)),
        )
    return pages


@lru_cache(maxsize=None)
def load_registry(
    locators_file: Optional[Path] = None,
    pages_file: Optional[Path] = None,
) -> LocatorRegistry:
    """
    Load (once) the locator and page tables.

    Args:
        locators_file: Override path for the locator table
        pages_file: Override path for the page table

    Returns:
        Cached LocatorRegistry
    """
    locators_file = Path(locators_file or LOCATORS_FILE)
    pages_file = Path(pages_file or PAGES_FILE)

    registry = LocatorRegistry(
        locators=parse_locators(_read_yaml(locators_file)),
        pages=parse_pages(_read_yaml(pages_file)),
    )
    logger.debug(
        f"Loaded {sum(1 for _ in registry)} locators and "
        f"{len(registry.pages)} pages from {DATA_DIR}"
    )
    return registry


__all__ = [
    "LocatorSpec",
    "PageSpec",
    "LocatorRegistry",
    "LocatorNotDefinedError",
    "load_registry",
    "parse_locators",
    "parse_pages",
]
