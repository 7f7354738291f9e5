"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by the directory they live in.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "unit: In-memory tests with fake sessions, no browser"
    )
    config.addinivalue_line(
        "markers", "ui: Tests that drive a real browser through Playwright"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "waits: Tests of the polling wait engine and conditions"
    )
    config.addinivalue_line(
        "markers", "pages: Tests of page objects and the page registry"
    )
    config.addinivalue_line(
        "markers", "session: Tests of session creation and proxying"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the suite marker based on the test's directory."""
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "pagewatch - Page Object Automation",
        "=" * 60,
        "",
    ]
