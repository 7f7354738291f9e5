"""
================================================================================
Exceptions
================================================================================

Failure taxonomy shared by the wait engine, page objects and session layer.

    - DriverError and subclasses: raised by the browser adapter. Not-found,
      stale and missing-frame failures are transient and ignored inside waits.
    - WaitTimeoutError family: raised only at wait boundaries.
    - UnsupportedDriverError / WrongPageError / ConfigurationError: fatal to
      the current operation, never retried.

Assertion helpers (`should_*`) raise the built-in AssertionError.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class AutomationError(Exception):
    """Base exception for all pagewatch failures."""
    pass


class DriverError(AutomationError):
    """A native browser operation failed."""
    pass


class ElementNotFoundError(DriverError):
    """No element matched the locator at lookup time."""
    pass


class StaleElementError(DriverError):
    """The element handle refers to a node that is no longer in the DOM."""
    pass


class FrameNotFoundError(DriverError):
    """The frame an operation targeted does not exist."""
    pass


class WaitTimeoutError(AutomationError):
    """
    Raised when a wait operation times out.

    Attributes:
        last_error: Last ignored exception raised by the predicate, if any
    """

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.last_error = last_error


class ElementNotVisibleError(WaitTimeoutError):
    """An element, text or title expected to show up never did."""
    pass


class UnexpectedElementVisibleError(WaitTimeoutError):
    """An element, text or title expected to go away is still there."""
    pass


class UnsupportedDriverError(AutomationError):
    """The browser session could not be created with the current configuration."""
    pass


class WrongPageError(AutomationError):
    """
    The requested page object cannot be used on the current page.

    Covers both "the browser is somewhere else" and "the page object is
    broken"; the underlying problem is kept in `cause`.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(AutomationError):
    """Raised when configuration loading or resource resolution fails."""
    pass


__all__ = [
    "AutomationError",
    "DriverError",
    "ElementNotFoundError",
    "StaleElementError",
    "FrameNotFoundError",
    "WaitTimeoutError",
    "ElementNotVisibleError",
    "UnexpectedElementVisibleError",
    "UnsupportedDriverError",
    "WrongPageError",
    "ConfigurationError",
]
