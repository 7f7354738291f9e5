"""
================================================================================
Browser Manager
================================================================================

Launches Playwright browsers on demand and hands out sessions.

Features:
    - One browser per factory, started on the first session request
    - Isolated context + page per session
    - chromium / firefox / webkit, chosen by configuration
    - Plugs into DriverSessionProxy as its session factory

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Playwright,
    sync_playwright,
)
from playwright.sync_api import Error as PlaywrightError

from .configuration import Configuration, SupportedDriver
from .session import PlaywrightSession


class PlaywrightSessionFactory:
    """
    Creates PlaywrightSession objects for one browser type.

    Features:
        - Lazy start: nothing is launched until the first session is requested
        - Each session gets its own context (separate cookies, storage)
        - close() tears down everything the factory started

    Usage:
        with PlaywrightSessionFactory(Configuration.load()) as factory:
            proxy = DriverSessionProxy(factory)
            proxy.navigate("https://example.com")
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        driver: Optional[str] = None,
        headless: Optional[bool] = None,
    ):
        """
        Initialize the factory.

        Args:
            configuration: Run configuration (defaults to Configuration.load())
            driver: Browser name overriding the configured one
            headless: Headless flag overriding the configured one

        Raises:
            UnsupportedDriverError: If the browser name is not supported
        """
        self.configuration = configuration or Configuration.load()
        self.driver = (
            SupportedDriver.lookup(driver) if driver else self.configuration.driver
        )
        self.headless = self.configuration.headless if headless is None else headless

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    def __enter__(self) -> "PlaywrightSessionFactory":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __call__(self) -> PlaywrightSession:
        return self.new_session()

    def start(self) -> None:
        """Start Playwright and launch the browser."""
        if self._browser is not None:
            return
        self._playwright = sync_playwright().start()
        launcher = getattr(self._playwright, self.driver.value)
        launch_options = {**self.DEFAULT_LAUNCH_OPTIONS, "headless": self.headless}
        try:
            self._browser = launcher.launch(**launch_options)
        except PlaywrightError:
            self._playwright.stop()
            self._playwright = None
            raise
        logger.debug(f"Browser started: {self.driver.value} (headless={self.headless})")

    def new_session(self, **context_options: Any) -> PlaywrightSession:
        """
        Open a new isolated browser session.

        Args:
            **context_options: Options for the new context

        Returns:
            PlaywrightSession over a fresh page
        """
        self.start()
        context = self._browser.new_context(
            **{**self.DEFAULT_CONTEXT_OPTIONS, **context_options}
        )
        self._contexts.append(context)
        page = context.new_page()
        logger.debug(f"New {self.driver.value} session opened")
        return PlaywrightSession(page)

    def close(self) -> None:
        """Close all contexts, the browser and Playwright itself."""
        for context in self._contexts:
            try:
                context.close()
            except PlaywrightError as e:
                logger.warning(f"Failed to close browser context: {e}")
        self._contexts.clear()

        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = ["PlaywrightSessionFactory"]
