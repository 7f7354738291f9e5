"""
Named predicates over elements, locators and page titles.

Every factory returns a zero-argument callable suitable for
ConditionWaiter.until(). Elements are reached through a *resolver*, a
zero-argument callable that returns an Element; `resolver_for` re-finds the
element on every call so each poll sees the current DOM.

Positive element predicates let not-found/stale errors propagate (the waiter
ignores them and keeps polling). Negated predicates treat those same errors as
"the complement holds".
"""

from __future__ import annotations

from typing import Callable, Sequence

from .exceptions import ElementNotFoundError, FrameNotFoundError, StaleElementError
from .locators import Locator
from .session import Element, find_first

Resolver = Callable[[], Element]
Predicate = Callable[[], bool]

_ABSENT = (ElementNotFoundError, StaleElementError, FrameNotFoundError)


def resolver_for(scope, locator: Locator) -> Resolver:
    """Resolve `locator` against `scope` (a session or element) on every call."""
    return lambda: find_first(scope, locator)


def resolver_of(element: Element) -> Resolver:
    """Resolver for an already-resolved element handle."""
    return lambda: element


def is_displayed(resolve: Resolver) -> Predicate:
    return lambda: bool(resolve().is_displayed())


def is_not_displayed(resolve: Resolver) -> Predicate:
    def check() -> bool:
        try:
            return not resolve().is_displayed()
        except _ABSENT:
            return True
    return check


def is_enabled(resolve: Resolver) -> Predicate:
    return lambda: bool(resolve().is_enabled())


def is_not_enabled(resolve: Resolver) -> Predicate:
    def check() -> bool:
        try:
            return not resolve().is_enabled()
        except _ABSENT:
            return True
    return check


def contains_text(resolve: Resolver, needle: str) -> Predicate:
    """Rendered text of the element contains `needle` (case-sensitive)."""
    return lambda: needle in (resolve().text or "")


def does_not_contain_text(resolve: Resolver, needle: str) -> Predicate:
    def check() -> bool:
        try:
            return needle not in (resolve().text or "")
        except _ABSENT:
            return True
    return check


def title_equals(session, value: str) -> Predicate:
    return lambda: session.title() == value


def title_does_not_equal(session, value: str) -> Predicate:
    return lambda: session.title() != value


def title_contains(session, value: str) -> Predicate:
    return lambda: value in (session.title() or "")


def first_displayed(scope, locator: Locator) -> Predicate:
    """The locator resolves to at least one element and the first one is displayed."""
    return is_displayed(resolver_for(scope, locator))


def none_displayed(scope, locator: Locator) -> Predicate:
    """The locator resolves to nothing, or to elements that are all hidden."""
    def check() -> bool:
        for element in scope.find_elements(locator):
            try:
                if element.is_displayed():
                    return False
            except _ABSENT:
                continue
        return True
    return check


def text_present(scope, text: str) -> Predicate:
    """Some displayed element under `scope` has a text node containing `text`."""
    locator = Locator.containing_text(text)

    def check() -> bool:
        for element in scope.find_elements(locator):
            try:
                if element.is_displayed():
                    return True
            except _ABSENT:
                continue
        return False
    return check


def text_absent(scope, text: str) -> Predicate:
    present = text_present(scope, text)
    return lambda: not present()


def any_of(predicates: Sequence[Predicate]) -> Predicate:
    """
    Logical OR, evaluated left to right on every poll.

    A transient failure in one candidate must not hide a later candidate that
    already holds, so those failures are skipped here and re-raised only when
    no candidate succeeded.
    """
    def check() -> bool:
        last_error = None
        for predicate in predicates:
            try:
                if predicate():
                    return True
            except _ABSENT as e:
                last_error = e
        if last_error is not None:
            raise last_error
        return False
    return check


__all__ = [
    "Resolver",
    "any_of",
    "contains_text",
    "does_not_contain_text",
    "first_displayed",
    "is_displayed",
    "is_enabled",
    "is_not_displayed",
    "is_not_enabled",
    "none_displayed",
    "resolver_for",
    "resolver_of",
    "text_absent",
    "text_present",
    "title_contains",
    "title_does_not_equal",
    "title_equals",
]
