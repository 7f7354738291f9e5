"""
================================================================================
Page Registry
================================================================================

Resolves page objects against the session's current URL and caches the
last one.

Rules:
    - get(PageType) builds a new page object every time, unless
      on_same_page() was called since the previous resolution and the
      cached page has the same type
    - every resolution consumes the on_same_page() flag
    - a page whose URL_PATTERN does not match the current URL is never
      returned
    - constructor failures and URL mismatches both surface as WrongPageError
    - start() navigates to the default URL at most once per registry

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Type, TypeVar

import allure
from loguru import logger

from .configuration import Configuration
from .driver_proxy import DriverSessionProxy
from .exceptions import WrongPageError
from .name_converter import humanize
from .page_base import PageObject
from .page_urls import PageUrls
from .session import Session


P = TypeVar("P", bound=PageObject)


@dataclass
class CachedPage:
    page_type: type
    page: PageObject
    resolved_at_url: str


class PageRegistry:
    """
    Hands out page objects bound to one browser session.

    Usage:
        pages = PageRegistry(proxy, default_base_url="https://example.com")
        pages.notify_when_driver_opens()
        home = pages.get(HomePage)
        pages.on_same_page()
        assert pages.get(HomePage) is home
    """

    def __init__(
        self,
        session: Session,
        default_base_url: Optional[str] = None,
        configuration: Optional[Configuration] = None,
    ):
        self.session = session
        self._default_base_url = default_base_url
        self._configuration = configuration
        self._cached: Optional[CachedPage] = None
        self._use_cached_page = False
        self._started = False

    @property
    def configuration(self) -> Configuration:
        if self._configuration is None:
            self._configuration = Configuration.load()
        return self._configuration

    @property
    def default_base_url(self) -> Optional[str]:
        return self._default_base_url

    @default_base_url.setter
    def default_base_url(self, url: Optional[str]) -> None:
        self._default_base_url = url

    # =========================================================================
    # Page resolution
    # =========================================================================

    def on_same_page(self) -> None:
        """The next get() may reuse the cached page if the type matches."""
        self._use_cached_page = True

    def get(self, page_type: Type[P]) -> P:
        """
        Return a page object of `page_type` for the current page.

        Raises:
            WrongPageError: If the page object can't be built (`cause` holds
                            the constructor error) or the browser is not on
                            that page (`cause` is None; the message names the
                            current URL)
        """
        use_cached = self._use_cached_page
        self._use_cached_page = False

        if use_cached and self._cached is not None and self._cached.page_type is page_type:
            logger.debug(f"Reusing cached page: {page_type.__name__}")
            return self._cached.page

        page = self._instantiate(page_type)
        current_url = self.session.current_url
        if not page_type.matches_url(current_url):
            raise WrongPageError(
                f"The browser is not showing the {humanize(page_type.__name__)}. "
                f"Current URL: {current_url}"
            )

        self._cached = CachedPage(page_type, page, current_url)
        logger.debug(f"Resolved page {page_type.__name__} at {current_url}")
        return page

    current_page_at = get

    def __getitem__(self, page_type: Type[P]) -> P:
        return self.get(page_type)

    def _instantiate(self, page_type: Type[P]) -> P:
        try:
            page = page_type(self.session)
        except Exception as e:
            raise WrongPageError(
                f"The page object {humanize(page_type.__name__)} could not be "
                f"created: {e!r}",
                cause=e,
            ) from e
        page.default_base_url = self._default_base_url
        return page

    def is_current_page_at(self, page_type: Type[PageObject]) -> bool:
        """URL check only; nothing is instantiated or cached."""
        return page_type.matches_url(self.session.current_url)

    # =========================================================================
    # Start page
    # =========================================================================

    def starting_url(self) -> Optional[str]:
        return PageUrls(self.configuration).starting_url(
            registry_default_url=self._default_base_url
        )

    def start(self) -> None:
        """Navigate to the default URL. Only the first call does anything."""
        if self._started:
            return
        self._started = True

        url = self.starting_url()
        if not url:
            logger.debug("No default URL configured; not navigating")
            return
        with allure.step(f"Open start page: {url}"):
            self.session.navigate(url)
        logger.info(f"Opened start page: {url}")

    def notify_when_driver_opens(self) -> None:
        """
        Open the start page as soon as the browser is available.

        A proxy that has not opened its browser yet gets a listener instead
        of an immediate navigation.
        """
        if isinstance(self.session, DriverSessionProxy) and not self.session.is_realized:
            self.session.register_listener(lambda _session: self.start())
        else:
            self.start()


__all__ = ["CachedPage", "PageRegistry"]
