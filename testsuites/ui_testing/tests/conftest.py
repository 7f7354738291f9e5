"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- One Playwright browser per test run, opened lazily
- Browser session per test, or per run with webdriver.unique_browser
- Page registry and page object fixtures
- Screenshot capture on failure

================================================================================
"""

from dataclasses import replace
from pathlib import Path
from typing import Generator

import allure
import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from pagewatch import (
    Configuration,
    DriverSessionProxy,
    PageRegistry,
    PlaywrightSessionFactory,
)
from testsuites.ui_testing.pages import IndexPage


RESOURCES_DIR = Path(__file__).resolve().parents[1] / "resources"


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def ui_configuration() -> Configuration:
    """
    Run configuration with the bundled static site on the resource path.

    The resource directory is made absolute so the suite does not depend on
    the directory pytest was started from.
    """
    configuration = Configuration.load()
    return replace(configuration, resource_dirs=(str(RESOURCES_DIR),))


def _driver_scope(fixture_name: str, config) -> str:
    # Decided at collection time from the raw settings, not from ui_configuration
    return "session" if Configuration.load().unique_browser else "function"


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def session_factory(
    ui_configuration: Configuration,
) -> Generator[PlaywrightSessionFactory, None, None]:
    """
    Session-scoped browser factory.

    Launches the browser up front so a missing Playwright install skips the
    suite instead of failing every test.
    """
    factory = PlaywrightSessionFactory(ui_configuration)
    try:
        factory.start()
    except PlaywrightError as e:
        pytest.skip(f"Playwright browser unavailable: {e}")
    yield factory
    factory.close()


@pytest.fixture(scope=_driver_scope)
def driver(
    session_factory: PlaywrightSessionFactory,
) -> Generator[DriverSessionProxy, None, None]:
    """
    Lazily opened browser session.

    The real page is only created when a test first talks to the browser.
    """
    proxy = DriverSessionProxy(session_factory)
    yield proxy
    proxy.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def pages(driver: DriverSessionProxy, ui_configuration: Configuration) -> PageRegistry:
    """Page registry bound to the test's browser session."""
    return PageRegistry(driver, configuration=ui_configuration)


@pytest.fixture
def index_page(driver: DriverSessionProxy, ui_configuration: Configuration) -> IndexPage:
    """
    Provides an opened IndexPage.

    Waits are shortened so negative-path tests finish quickly.
    """
    page = IndexPage(driver, configuration=ui_configuration)
    page.set_wait_for_timeout(2000)
    page.set_polling_interval(50)
    return page.open()


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Only sessions that actually opened a browser are photographed.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    proxy = getattr(item, "funcargs", {}).get("driver")
    if not isinstance(proxy, DriverSessionProxy) or not proxy.is_realized:
        return

    try:
        screenshot = proxy.proxied_session.page.screenshot(full_page=True)
    except PlaywrightError as e:
        logger.warning(f"Failed to capture screenshot on failure: {e}")
        return

    allure.attach(
        screenshot,
        name="failure_screenshot",
        attachment_type=allure.attachment_type.PNG,
    )
