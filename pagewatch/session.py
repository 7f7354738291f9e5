"""
================================================================================
Browser Session Adapter
================================================================================

Session and element protocols used throughout pagewatch, plus their
Playwright implementation.

Features:
    - Structural `Session` / `Element` protocols (anything quacking like them
      can drive page objects, including in-memory fakes in unit tests)
    - PlaywrightSession / PlaywrightElement over `playwright.sync_api`
    - Playwright errors classified into DriverError subclasses so the wait
      engine can tell transient failures from real ones

The adapter never logs; classification is all it does with failures.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Protocol, runtime_checkable

from playwright.sync_api import ElementHandle, Page
from playwright.sync_api import Error as PlaywrightError

from .exceptions import (
    DriverError,
    ElementNotFoundError,
    FrameNotFoundError,
    StaleElementError,
)
from .locators import Locator


@runtime_checkable
class Element(Protocol):
    """One resolved DOM node. May go stale when the DOM changes."""

    def is_displayed(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def is_selected(self) -> bool: ...

    def is_attached(self) -> bool: ...

    def has_focus(self) -> bool: ...

    @property
    def text(self) -> str: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def click(self) -> None: ...

    def clear(self) -> None: ...

    def send_keys(self, value: str) -> None: ...

    def press(self, key: str) -> None: ...

    def select_by_visible_text(self, label: str) -> None: ...

    def select_by_value(self, value: str) -> None: ...

    def select_by_index(self, index: int) -> None: ...

    def selected_option_text(self) -> str: ...

    def selected_option_value(self) -> str: ...

    def find_elements(self, locator: Locator) -> List["Element"]: ...


@runtime_checkable
class Session(Protocol):
    """One browser instance as seen by page objects."""

    def navigate(self, url: str) -> None: ...

    @property
    def current_url(self) -> str: ...

    def title(self) -> str: ...

    def find_elements(self, locator: Locator) -> List[Element]: ...

    def find_element(self, locator: Locator) -> Element: ...

    def close(self) -> None: ...


# Playwright reports these through its generic Error type; the message is the
# only thing that tells them apart.
_DETACHED_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "node is detached",
    "execution context was destroyed",
)
_FRAME_MARKERS = ("failed to find frame", "frame was detached", "frame not found")


@contextmanager
def translate_errors(what: str) -> Iterator[None]:
    """Re-raise Playwright errors as DriverError subclasses."""
    try:
        yield
    except PlaywrightError as e:
        message = str(e)
        lowered = message.lower()
        if any(marker in lowered for marker in _DETACHED_MARKERS):
            raise StaleElementError(f"{what}: {message}") from e
        if any(marker in lowered for marker in _FRAME_MARKERS):
            raise FrameNotFoundError(f"{what}: {message}") from e
        raise DriverError(f"{what}: {message}") from e


def find_first(scope, locator: Locator) -> Element:
    """Return the first element `scope` finds for `locator`, or raise ElementNotFoundError."""
    elements = scope.find_elements(locator)
    if not elements:
        raise ElementNotFoundError(f"Could not find an element matching {locator}")
    return elements[0]


class PlaywrightElement:
    """Element protocol over a Playwright ElementHandle."""

    def __init__(self, handle: ElementHandle, description: str = ""):
        self._handle = handle
        self._description = description or "element"

    @property
    def handle(self) -> ElementHandle:
        return self._handle

    def is_displayed(self) -> bool:
        with translate_errors(f"is_displayed({self._description})"):
            return self._handle.is_visible()

    def is_enabled(self) -> bool:
        with translate_errors(f"is_enabled({self._description})"):
            return self._handle.is_enabled()

    def is_selected(self) -> bool:
        with translate_errors(f"is_selected({self._description})"):
            return bool(self._handle.evaluate("el => !!(el.selected || el.checked)"))

    def is_attached(self) -> bool:
        # Explicit state query; a detached node answers False instead of raising
        try:
            return bool(self._handle.evaluate("el => el.isConnected"))
        except PlaywrightError:
            return False

    def has_focus(self) -> bool:
        with translate_errors(f"has_focus({self._description})"):
            return bool(self._handle.evaluate("el => el === document.activeElement"))

    @property
    def text(self) -> str:
        with translate_errors(f"text({self._description})"):
            return self._handle.inner_text()

    def get_attribute(self, name: str) -> Optional[str]:
        # Live DOM property first (what the user typed), then the HTML attribute
        script = (
            "(el, name) => {"
            " const prop = el[name];"
            " if (prop !== undefined && prop !== null && typeof prop !== 'object'"
            " && typeof prop !== 'function') { return String(prop); }"
            " return el.getAttribute(name); }"
        )
        with translate_errors(f"get_attribute({self._description}, {name})"):
            return self._handle.evaluate(script, name)

    def click(self) -> None:
        with translate_errors(f"click({self._description})"):
            self._handle.click()

    def clear(self) -> None:
        with translate_errors(f"clear({self._description})"):
            self._handle.fill("")

    def send_keys(self, value: str) -> None:
        with translate_errors(f"send_keys({self._description})"):
            self._handle.type(value)

    def press(self, key: str) -> None:
        with translate_errors(f"press({self._description}, {key})"):
            self._handle.press(key)

    def select_by_visible_text(self, label: str) -> None:
        with translate_errors(f"select_by_visible_text({self._description})"):
            self._handle.select_option(label=label)

    def select_by_value(self, value: str) -> None:
        with translate_errors(f"select_by_value({self._description})"):
            self._handle.select_option(value=value)

    def select_by_index(self, index: int) -> None:
        with translate_errors(f"select_by_index({self._description})"):
            self._handle.select_option(index=index)

    def selected_option_text(self) -> str:
        with translate_errors(f"selected_option_text({self._description})"):
            return self._handle.evaluate(
                "el => el.selectedOptions.length ? el.selectedOptions[0].text : ''"
            )

    def selected_option_value(self) -> str:
        with translate_errors(f"selected_option_value({self._description})"):
            return self._handle.evaluate(
                "el => el.selectedOptions.length ? el.selectedOptions[0].value : ''"
            )

    def find_elements(self, locator: Locator) -> List[Element]:
        with translate_errors(f"find_elements({self._description}, {locator})"):
            handles = self._handle.query_selector_all(locator.to_selector())
        return [PlaywrightElement(h, str(locator)) for h in handles]

    def __repr__(self) -> str:
        return f"<PlaywrightElement {self._description}>"


class PlaywrightSession:
    """
    Session protocol over a Playwright Page.

    Args:
        page: Playwright Page (sync API)
        navigation_timeout_ms: Timeout for `navigate()`
    """

    def __init__(self, page: Page, navigation_timeout_ms: int = 30000):
        self._page = page
        self._navigation_timeout_ms = navigation_timeout_ms

    @property
    def page(self) -> Page:
        return self._page

    def navigate(self, url: str) -> None:
        with translate_errors(f"navigate({url})"):
            self._page.goto(url, wait_until="domcontentloaded", timeout=self._navigation_timeout_ms)

    @property
    def current_url(self) -> str:
        return self._page.url

    def title(self) -> str:
        with translate_errors("title()"):
            return self._page.title()

    def find_elements(self, locator: Locator) -> List[Element]:
        with translate_errors(f"find_elements({locator})"):
            handles = self._page.query_selector_all(locator.to_selector())
        return [PlaywrightElement(h, str(locator)) for h in handles]

    def find_element(self, locator: Locator) -> Element:
        return find_first(self, locator)

    def close(self) -> None:
        if not self._page.is_closed():
            self._page.close()


__all__ = [
    "Element",
    "Session",
    "PlaywrightElement",
    "PlaywrightSession",
    "find_first",
    "translate_errors",
]
