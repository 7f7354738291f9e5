# ================================================================================
# Element Facade Module
# ================================================================================
#
# Wraps a single element (a resolved handle, or a locator re-resolved on every
# access) with wait-then-act and wait-then-assert operations.
#
# Key Features:
#   - Actions wait for the element to be enabled before acting
#   - Queries wait for visibility before reading
#   - Immediate checks never raise for missing or stale elements
#   - One retry of the native click on a driver failure
#   - Allure step integration
#
# ================================================================================

from __future__ import annotations

import time
from functools import wraps
from typing import Callable, Optional, Tuple, Type, Union

import allure
from loguru import logger

from . import conditions
from .exceptions import (
    DriverError,
    ElementNotFoundError,
    ElementNotVisibleError,
    FrameNotFoundError,
    StaleElementError,
    UnexpectedElementVisibleError,
    WaitTimeoutError,
)
from .locators import Locator
from .session import Element, find_first
from .wait_helpers import ConditionWaiter, WaitPolicy


_ABSENT = (ElementNotFoundError, StaleElementError, FrameNotFoundError)


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 2,
        delay_seconds: float = 0.1,
        retry_on: Tuple[Type[BaseException], ...] = (DriverError,),
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Total number of attempts, first one included
            delay_seconds: Pause between attempts
            retry_on: Exception types that trigger another attempt
        """
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.retry_on = retry_on


def with_retry(config: RetryConfig = None):
    """
    Decorator retrying a native action on the configured exception types.

    Args:
        config: RetryConfig controlling attempts and delay
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(1, config.max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except config.retry_on as e:
                    if attempt == config.max_attempts:
                        logger.error(
                            f"All {config.max_attempts} attempts failed for "
                            f"{func.__name__}: {e}"
                        )
                        raise
                    logger.warning(
                        f"Attempt {attempt}/{config.max_attempts} failed for "
                        f"{func.__name__}: {e}. Retrying in {config.delay_seconds}s..."
                    )
                    time.sleep(config.delay_seconds)

        return wrapper
    return decorator


# Clicking sometimes lands while an overlay is still fading out
CLICK_RETRY = RetryConfig(max_attempts=2, delay_seconds=0.1)


class ElementFacade:
    """
    A single UI element with waiting built in.

    The facade either holds a fixed element handle or a (scope, locator) pair;
    in the latter case every operation re-resolves the element, so a DOM
    refresh between calls is harmless.

    Example:
        field = ElementFacade.located(session, Locator.id("username"))
        field.type("alice").and_().then().should_be_visible()
    """

    def __init__(
        self,
        element: Optional[Element] = None,
        *,
        scope=None,
        locator: Optional[Locator] = None,
        policy: Optional[WaitPolicy] = None,
        name: str = "",
    ):
        """
        Initialize the facade.

        Args:
            element: Resolved element handle (mutually exclusive with locator)
            scope: Session or element the locator is resolved against
            locator: Locator re-resolved on every access
            policy: Wait policy for the wait-then-* operations
            name: Human-readable element name for messages
        """
        if element is None and (scope is None or locator is None):
            raise ValueError("ElementFacade needs an element or a scope and a locator")
        self._element = element
        self._scope = scope
        self._locator = locator
        self.policy = policy or WaitPolicy()
        self.name = name or (str(locator) if locator is not None else repr(element))

    @classmethod
    def located(
        cls,
        scope,
        locator: Locator,
        policy: Optional[WaitPolicy] = None,
        name: str = "",
    ) -> "ElementFacade":
        return cls(scope=scope, locator=locator, policy=policy, name=name)

    # =========================================================================
    # Resolution and waiting
    # =========================================================================

    def _resolve(self) -> Element:
        if self._element is not None:
            return self._element
        return find_first(self._scope, self._locator)

    def _wait(self, predicate: Callable[[], bool], description: str) -> None:
        ConditionWaiter(self.policy).until(predicate, f"{self.name} {description}")

    @staticmethod
    def _cause_message(timeout: WaitTimeoutError, default: str) -> str:
        if timeout.last_error is not None:
            return str(timeout.last_error)
        return default

    def wait_until_visible(self) -> "ElementFacade":
        try:
            self._wait(conditions.is_displayed(self._resolve), "to be visible")
        except WaitTimeoutError as timeout:
            raise ElementNotVisibleError(
                self._cause_message(timeout, f"Element {self.name} was not visible"),
                last_error=timeout.last_error,
            ) from timeout
        return self

    def wait_until_not_visible(self) -> "ElementFacade":
        try:
            self._wait(conditions.is_not_displayed(self._resolve), "to be hidden")
        except WaitTimeoutError as timeout:
            raise UnexpectedElementVisibleError(
                f"Expected hidden element {self.name} was displayed",
                last_error=timeout.last_error,
            ) from timeout
        return self

    def wait_until_enabled(self) -> "ElementFacade":
        try:
            self._wait(conditions.is_enabled(self._resolve), "to be enabled")
        except WaitTimeoutError as timeout:
            raise ElementNotVisibleError(
                self._cause_message(
                    timeout, f"Expected enabled element {self.name} was not enabled"
                ),
                last_error=timeout.last_error,
            ) from timeout
        return self

    def wait_until_disabled(self) -> "ElementFacade":
        try:
            self._wait(conditions.is_not_enabled(self._resolve), "to be disabled")
        except WaitTimeoutError as timeout:
            raise ElementNotVisibleError(
                f"Expected disabled element {self.name} was still enabled",
                last_error=timeout.last_error,
            ) from timeout
        return self

    # =========================================================================
    # Fluent helpers
    # =========================================================================

    def and_(self) -> "ElementFacade":
        """Convenience method to chain method calls more fluently."""
        return self

    def then(self) -> "ElementFacade":
        """Convenience method to chain method calls more fluently."""
        return self

    # =========================================================================
    # Immediate checks
    # =========================================================================

    def is_visible(self) -> bool:
        """
        Is this element present and visible right now?

        Never raises for a missing or stale element; those read as False.
        """
        try:
            return bool(self._resolve().is_displayed())
        except _ABSENT:
            return False

    def is_currently_visible(self) -> bool:
        """Same as is_visible(); named for assertion helpers that must not wait."""
        return self.is_visible()

    def is_currently_enabled(self) -> bool:
        try:
            return bool(self._resolve().is_enabled())
        except _ABSENT:
            return False

    def is_enabled(self) -> bool:
        return bool(self._resolve().is_enabled())

    def is_present(self) -> bool:
        """Is the element in the DOM at all, visible or not?"""
        if self._element is not None:
            return self._element.is_attached()
        return bool(self._scope.find_elements(self._locator))

    def has_focus(self) -> bool:
        try:
            return bool(self._resolve().has_focus())
        except _ABSENT:
            return False

    def contains_text(self, value: str) -> bool:
        return value in (self._resolve().text or "")

    def resolve(self) -> Element:
        """Current element handle; locator-based facades look it up again."""
        return self._resolve()

    # =========================================================================
    # Assertions
    # =========================================================================

    def should_be_visible(self) -> None:
        if not self.is_visible():
            raise AssertionError(f"Element {self.name} should be visible")

    def should_be_currently_visible(self) -> None:
        if not self.is_currently_visible():
            raise AssertionError(f"Element {self.name} should be visible")

    def should_not_be_visible(self) -> None:
        if self.is_visible():
            raise AssertionError(f"Element {self.name} should not be visible")

    def should_not_be_currently_visible(self) -> None:
        if self.is_currently_visible():
            raise AssertionError(f"Element {self.name} should not be visible")

    def should_contain_text(self, value: str) -> None:
        if not self.contains_text(value):
            raise AssertionError(
                f"The text '{value}' was not found in the web element {self.name}"
            )

    def should_not_contain_text(self, value: str) -> None:
        if self.contains_text(value):
            raise AssertionError(
                f"The text '{value}' was found in the web element {self.name}"
            )

    def should_be_enabled(self) -> None:
        if not self.is_enabled():
            raise AssertionError(f"Field {self.name} should be enabled")

    def should_not_be_enabled(self) -> None:
        if self.is_enabled():
            raise AssertionError(f"Field {self.name} should not be enabled")

    def should_be_present(self) -> None:
        if not self.is_present():
            raise AssertionError(f"Field {self.name} should be present")

    def should_not_be_present(self) -> None:
        if self.is_present():
            raise AssertionError(f"Field {self.name} should not be present")

    # =========================================================================
    # Wait-then-act
    # =========================================================================

    def type(self, value: str) -> "ElementFacade":
        """Type a value into a field, making sure that the field is empty first."""
        with allure.step(f"Type into {self.name}"):
            self.wait_until_enabled()
            element = self._resolve()
            element.clear()
            element.send_keys(value)
        logger.debug(f"Typed into: {self.name}")
        return self

    def type_and_enter(self, value: str) -> "ElementFacade":
        """Type a value into a field and then press Enter."""
        self.type(value)
        self._resolve().press("Enter")
        return self

    def type_and_tab(self, value: str) -> "ElementFacade":
        """Type a value into a field and then press Tab."""
        self.type(value)
        self._resolve().press("Tab")
        return self

    def select_by_visible_text(self, label: str) -> "ElementFacade":
        with allure.step(f"Select '{label}' in {self.name}"):
            self.wait_until_enabled()
            self._resolve().select_by_visible_text(label)
        logger.debug(f"Selected option '{label}' in {self.name}")
        return self

    def select_by_value(self, value: str) -> "ElementFacade":
        with allure.step(f"Select value '{value}' in {self.name}"):
            self.wait_until_enabled()
            self._resolve().select_by_value(value)
        return self

    def select_by_index(self, index: int) -> "ElementFacade":
        with allure.step(f"Select option #{index} in {self.name}"):
            self.wait_until_enabled()
            self._resolve().select_by_index(index)
        return self

    def click(self) -> "ElementFacade":
        """Wait for the element to be enabled, then click it."""
        with allure.step(f"Click: {self.name}"):
            self.wait_until_enabled()
            logger.info(f"Clicking element: {self.name}")
            self._native_click()
        return self

    @with_retry(CLICK_RETRY)
    def _native_click(self) -> None:
        # Resolved per attempt: a locator-based retry must not reuse a stale handle
        self._resolve().click()

    # =========================================================================
    # Wait-then-query
    # =========================================================================

    def get_text(self) -> str:
        self.wait_until_visible()
        return self._resolve().text or ""

    def get_value(self) -> str:
        self.wait_until_visible()
        return self._resolve().get_attribute("value") or ""

    def is_selected(self) -> bool:
        self.wait_until_visible()
        return bool(self._resolve().is_selected())

    def get_selected_visible_text_value(self) -> str:
        self.wait_until_visible()
        return self._resolve().selected_option_text()

    def get_selected_value(self) -> str:
        self.wait_until_visible()
        return self._resolve().selected_option_value()

    def get_text_value(self) -> str:
        """
        Text content for text nodes, value for inputs.

        Returns the rendered text if non-empty, otherwise the `value`
        attribute if non-empty, otherwise an empty string.
        """
        self.wait_until_visible()
        element = self._resolve()
        text = element.text or ""
        if text:
            return text
        value = element.get_attribute("value") or ""
        if value:
            return value
        return ""

    def __repr__(self) -> str:
        return f"<ElementFacade {self.name}>"


ElementTarget = Union[Element, Locator, ElementFacade]


__all__ = [
    "CLICK_RETRY",
    "ElementFacade",
    "ElementTarget",
    "RetryConfig",
    "with_retry",
]
