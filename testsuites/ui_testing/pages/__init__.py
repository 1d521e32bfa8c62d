"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the public site.

Each page class encapsulates:
    - Locators (looked up from the shared locator table)
    - Page-specific actions
    - Non-fatal verification checks

Page objects receive an `ElementActions` helper; none of them subclasses a
driver base class.

Author: Automation Team
License: MIT
================================================================================
"""

from .blog_page import BlogPage
from .landing_page import LandingPage
from .login_page import LoginPage
from .pricing_page import PricingPage
from .public_page import PublicPage
from .seo_landing_page import SeoLandingPage

__all__ = [
    "BlogPage",
    "LandingPage",
    "LoginPage",
    "PricingPage",
    "PublicPage",
    "SeoLandingPage",
]
