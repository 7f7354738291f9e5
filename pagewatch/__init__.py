"""
================================================================================
pagewatch
================================================================================

Page-object test automation on top of Playwright's synchronous API.

Components:
    - wait_helpers: polling wait engine and wait policies
    - conditions: named predicates for waits
    - element_facade: wait-then-act / wait-then-assert element wrapper
    - page_base: base page object with page-level waits and assertions
    - driver_proxy: lazily realized browser session
    - page_registry: page object resolution and caching
    - browser_manager: Playwright session factory

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import PlaywrightSessionFactory
from .configuration import Configuration, SupportedDriver
from .driver_proxy import DriverSessionProxy, ProxyState
from .element_facade import ElementFacade, RetryConfig, with_retry
from .exceptions import (
    AutomationError,
    ConfigurationError,
    DriverError,
    ElementNotFoundError,
    ElementNotVisibleError,
    FrameNotFoundError,
    StaleElementError,
    UnexpectedElementVisibleError,
    UnsupportedDriverError,
    WaitTimeoutError,
    WrongPageError,
)
from .locators import Locator
from .page_base import PageObject
from .page_registry import PageRegistry
from .page_urls import PageUrls
from .session import Element, PlaywrightSession, Session
from .wait_helpers import ConditionWaiter, WaitPolicy, get_wait_policy, wait_until

__version__ = "1.0.0"

__all__ = [
    "AutomationError",
    "ConditionWaiter",
    "Configuration",
    "ConfigurationError",
    "DriverError",
    "DriverSessionProxy",
    "Element",
    "ElementFacade",
    "ElementNotFoundError",
    "ElementNotVisibleError",
    "FrameNotFoundError",
    "Locator",
    "PageObject",
    "PageRegistry",
    "PageUrls",
    "PlaywrightSession",
    "PlaywrightSessionFactory",
    "ProxyState",
    "RetryConfig",
    "Session",
    "StaleElementError",
    "SupportedDriver",
    "UnexpectedElementVisibleError",
    "UnsupportedDriverError",
    "WaitPolicy",
    "WaitTimeoutError",
    "WrongPageError",
    "get_wait_policy",
    "wait_until",
    "with_retry",
]
