"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Page-scoped waits (rendered elements, text, title)
    - Immediate assertions on elements and page text
    - Element access through ElementFacade
    - Fluent field entry
    - Navigation to the page's resolved starting URL

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import time
from dataclasses import replace
from typing import List, Optional, Pattern, Type, TypeVar

import allure
from loguru import logger

from . import conditions
from .configuration import Configuration
from .element_facade import ElementFacade, ElementTarget
from .exceptions import (
    ElementNotFoundError,
    ElementNotVisibleError,
    FrameNotFoundError,
    StaleElementError,
    UnexpectedElementVisibleError,
    WaitTimeoutError,
)
from .locators import Locator
from .page_urls import PageUrls
from .session import Element, Session
from .wait_helpers import ConditionWaiter, WaitPolicy


_ABSENT = (ElementNotFoundError, StaleElementError, FrameNotFoundError)

P = TypeVar("P", bound="PageObject")


class FieldEntry:
    """Second half of `page.enter(value).into(field)`."""

    def __init__(self, page: "PageObject", value: str):
        self._page = page
        self._value = value

    def into(self, target: ElementTarget) -> ElementFacade:
        return self._page.type_into(target, self._value)

    def into_field(self, locator: Locator) -> ElementFacade:
        return self._page.type_into(locator, self._value)


class PageObject:
    """
    Base class for all page objects.

    Provides common functionality for:
        - Waiting for elements, text and titles
        - Assertions on visibility and text
        - Typing and clicking with built-in waits
        - Opening the page at its starting URL

    Usage:
        class LoginPage(PageObject):
            DEFAULT_URL = "https://example.com/login"
            URL_PATTERN = r"https://example\\.com/login.*"

            def login(self, username: str, password: str):
                self.enter(username).into_field(Locator.id("username"))
                self.enter(password).into_field(Locator.id("password"))
                self.click_on(Locator.css("button[type=submit]"))
    """

    # Override in subclasses
    DEFAULT_URL: Optional[str] = None
    URL_PATTERN: Optional[str] = None

    def __init__(
        self,
        session: Session,
        wait_policy: Optional[WaitPolicy] = None,
        configuration: Optional[Configuration] = None,
    ):
        """
        Initialize page object.

        Args:
            session: Browser session shared with other page objects
            wait_policy: Wait policy for this page (defaults to the configured one)
            configuration: Run configuration (defaults to Configuration.load())
        """
        if session is None:
            raise ValueError(f"{type(self).__name__} needs a browser session")
        self.session = session
        self.configuration = configuration or Configuration.load()
        self.wait_policy = (
            wait_policy.copy() if wait_policy else self.configuration.default_wait_policy()
        )
        # Set by the owning PageRegistry
        self.default_base_url: Optional[str] = None

    # =========================================================================
    # URL matching
    # =========================================================================

    @classmethod
    def declared_url_pattern(cls) -> Optional[Pattern]:
        if not cls.URL_PATTERN:
            return None
        return re.compile(cls.URL_PATTERN)

    @classmethod
    def matches_url(cls, url: str) -> bool:
        """Does `url` match URL_PATTERN? Pages without a pattern match anything."""
        pattern = cls.declared_url_pattern()
        if pattern is None:
            return True
        url = url or ""
        return bool(pattern.fullmatch(url) or pattern.fullmatch(url.rstrip("/")))

    # =========================================================================
    # Configuration surface
    # =========================================================================

    def set_wait_for_timeout(self, timeout_ms: int) -> None:
        self.wait_policy = replace(self.wait_policy, timeout_ms=timeout_ms)

    def set_polling_interval(self, poll_interval_ms: int) -> None:
        self.wait_policy = replace(self.wait_policy, poll_interval_ms=poll_interval_ms)

    def _waiter(self) -> ConditionWaiter:
        return ConditionWaiter(self.wait_policy)

    # =========================================================================
    # Navigation
    # =========================================================================

    def starting_url(self) -> Optional[str]:
        return PageUrls(self.configuration).starting_url(
            explicit_url=self.DEFAULT_URL,
            registry_default_url=self.default_base_url,
        )

    def open(self: P) -> P:
        """Navigate to this page's starting URL, if one can be resolved."""
        url = self.starting_url()
        if not url:
            logger.debug(f"No starting URL for {type(self).__name__}; staying put")
            return self
        with allure.step(f"Open {type(self).__name__}"):
            self.session.navigate(url)
        logger.info(f"Opened {type(self).__name__} at {url}")
        return self

    def get_title(self) -> str:
        return self.session.title()

    @property
    def current_url(self) -> str:
        return self.session.current_url

    # =========================================================================
    # Page-scoped waits
    # =========================================================================

    def wait_for_rendered_elements(self, locator: Locator) -> "PageObject":
        """Wait until `locator` finds an element and the first one is displayed."""
        with allure.step(f"Wait for rendered element: {locator}"):
            try:
                self._waiter().until(
                    conditions.first_displayed(self.session, locator),
                    f"element {locator} to be displayed",
                )
            except WaitTimeoutError as timeout:
                raise ElementNotVisibleError(
                    f"Expected visible element was not displayed: {locator}",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def wait_for_rendered_elements_to_disappear(self, locator: Locator) -> "PageObject":
        """Wait until `locator` finds nothing, or nothing that is displayed."""
        with allure.step(f"Wait for element to disappear: {locator}"):
            try:
                self._waiter().until(
                    conditions.none_displayed(self.session, locator),
                    f"element {locator} to disappear",
                )
            except WaitTimeoutError as timeout:
                raise UnexpectedElementVisibleError(
                    f"Expected hidden element was displayed: {locator}",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def wait_for_any_rendered_element_of(self, *locators: Locator) -> "PageObject":
        """
        Wait until any one of `locators` is displayed.

        All candidates share one timeout budget; each poll checks them in order.
        """
        names = ", ".join(str(locator) for locator in locators)
        with allure.step(f"Wait for any rendered element of: {names}"):
            try:
                self._waiter().until(
                    conditions.any_of(
                        [conditions.first_displayed(self.session, loc) for loc in locators]
                    ),
                    f"any of [{names}] to be displayed",
                )
            except WaitTimeoutError as timeout:
                raise ElementNotVisibleError(
                    f"None of the expected elements were displayed: {names}",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def _text_shown(self, text: str, within: Optional[ElementTarget]):
        """
        Page-wide: some displayed element has a text node containing `text`.
        Scoped: the rendered text of `within` itself (children included)
        contains `text`.
        """
        if within is None:
            return conditions.text_present(self.session, text)
        return conditions.contains_text(self.element(within).resolve, text)

    def _text_gone(self, text: str, within: Optional[ElementTarget]):
        if within is None:
            return conditions.text_absent(self.session, text)
        return conditions.does_not_contain_text(self.element(within).resolve, text)

    def wait_for_text_to_appear(
        self, text: str, within: Optional[ElementTarget] = None
    ) -> "PageObject":
        with allure.step(f"Wait for text to appear: {text}"):
            try:
                self._waiter().until(
                    self._text_shown(text, within),
                    f"text '{text}' to appear",
                )
            except WaitTimeoutError as timeout:
                raise ElementNotVisibleError(
                    f"Expected text was not displayed: '{text}'",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def wait_for_any_text_to_appear(
        self, *texts: str, within: Optional[ElementTarget] = None
    ) -> "PageObject":
        quoted = ", ".join(f"'{text}'" for text in texts)
        with allure.step(f"Wait for any text to appear: {quoted}"):
            try:
                self._waiter().until(
                    conditions.any_of([self._text_shown(t, within) for t in texts]),
                    f"any of [{quoted}] to appear",
                )
            except WaitTimeoutError as timeout:
                raise ElementNotVisibleError(
                    f"None of the expected texts were displayed: {quoted}",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def wait_for_text_to_disappear(
        self, text: str, within: Optional[ElementTarget] = None
    ) -> "PageObject":
        with allure.step(f"Wait for text to disappear: {text}"):
            try:
                self._waiter().until(
                    self._text_gone(text, within),
                    f"text '{text}' to disappear",
                )
            except WaitTimeoutError as timeout:
                raise UnexpectedElementVisibleError(
                    f"Text was still displayed: '{text}'",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def wait_for_title_to_appear(self, title: str) -> "PageObject":
        with allure.step(f"Wait for title: {title}"):
            try:
                self._waiter().until(
                    conditions.title_equals(self.session, title),
                    f"title '{title}'",
                )
            except WaitTimeoutError as timeout:
                raise ElementNotVisibleError(
                    f"Expected title '{title}' but was '{self._safe_title()}'",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def wait_for_title_to_disappear(self, title: str) -> "PageObject":
        with allure.step(f"Wait for title to change from: {title}"):
            try:
                self._waiter().until(
                    conditions.title_does_not_equal(self.session, title),
                    f"title other than '{title}'",
                )
            except WaitTimeoutError as timeout:
                raise UnexpectedElementVisibleError(
                    f"Title was still '{title}'",
                    last_error=timeout.last_error,
                ) from timeout
        return self

    def _safe_title(self) -> str:
        try:
            return self.session.title()
        except _ABSENT:
            return "<unavailable>"

    def wait_a_bit(self, delay_ms: int) -> None:
        """Unconditional pause. Prefer the condition waits above."""
        time.sleep(delay_ms / 1000.0)

    # =========================================================================
    # Elements
    # =========================================================================

    def element(self, target: ElementTarget) -> ElementFacade:
        """Wrap a locator or element handle in an ElementFacade using this page's waits."""
        if isinstance(target, ElementFacade):
            return target
        if isinstance(target, Locator):
            return ElementFacade.located(self.session, target, policy=self.wait_policy)
        return ElementFacade(target, policy=self.wait_policy)

    def find_elements(self, locator: Locator) -> List[Element]:
        return self.session.find_elements(locator)

    def then_return_element_list(self, locator: Locator) -> List[Element]:
        return self.find_elements(locator)

    def is_element_visible(self, locator: Locator) -> bool:
        return self.element(locator).is_visible()

    # =========================================================================
    # Assertions
    # =========================================================================

    def should_be_visible(self, target: ElementTarget) -> None:
        self.element(target).should_be_visible()

    def should_not_be_visible(self, target: ElementTarget) -> None:
        self.element(target).should_not_be_visible()

    def contains_text(self, text: str) -> bool:
        """Is `text` displayed anywhere on the page right now?"""
        try:
            return conditions.text_present(self.session, text)()
        except _ABSENT:
            return False

    def should_contain_text(self, text: str) -> None:
        if not self.contains_text(text):
            raise AssertionError(f"Expected text was not found on the page: '{text}'")

    def contains_text_in_element(self, target: ElementTarget, text: str) -> bool:
        return self.element(target).contains_text(text)

    def should_contain_text_in_element(self, target: ElementTarget, text: str) -> None:
        self.element(target).should_contain_text(text)

    def should_not_contain_text_in_element(self, target: ElementTarget, text: str) -> None:
        self.element(target).should_not_contain_text(text)

    # =========================================================================
    # Input
    # =========================================================================

    def type_into(self, target: ElementTarget, value: str) -> ElementFacade:
        """Clear the field, then type `value` into it."""
        return self.element(target).type(value)

    def enter(self, value: str) -> FieldEntry:
        return FieldEntry(self, value)

    def click_on(self, target: ElementTarget) -> ElementFacade:
        return self.element(target).click()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} session={self.session!r}>"


PageType = Type[PageObject]


__all__ = ["FieldEntry", "PageObject", "PageType"]
