"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the test suites.
It registers common markers and gates live browser tests.

================================================================================
"""

import os

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and optional affordances"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: Live browser tests against the site under test"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "unit: Offline framework tests"
    )
    config.addinivalue_line(
        "markers", "responsive: Viewport-dependent layout tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "landing: Landing page validation"
    )
    config.addinivalue_line(
        "markers", "navigation: Navigation and public routes"
    )
    config.addinivalue_line(
        "markers", "seo: SEO landing pages"
    )
    config.addinivalue_line(
        "markers", "login: Login page UI"
    )
    config.addinivalue_line(
        "markers", "blog: Blog listing and articles"
    )


def _run_e2e(config) -> bool:
    if config.getoption("run_e2e", default=False):
        return True
    return os.environ.get("RUN_E2E", "").strip().lower() in ("1", "true", "yes", "on")


def pytest_collection_modifyitems(config, items):
    """
    Tag tests by location and skip live tests unless explicitly requested.
    """
    skip_live = pytest.mark.skip(reason="live browser test: use --run-e2e or RUN_E2E=1")
    run_live = _run_e2e(config)

    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)

        if "unit" in path.split(os.sep):
            item.add_marker(pytest.mark.unit)

        if not run_live and item.get_closest_marker("e2e"):
            item.add_marker(skip_live)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "GetQuickResume Public-Site E2E Suite",
        "=" * 60,
        "",
    ]
