# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# This module provides the polling primitive every page-level and element-level
# wait is built on.
#
# Key Features:
#   - Fixed-interval polling with an immediate first evaluation
#   - Timeout measured from the first evaluation
#   - Configurable set of ignored (transient) exception types
#   - Timeout errors carry the last ignored failure as their cause
#   - Injectable clock and sleeper
#
# Usage:
#   wait_until(lambda: element.is_displayed(), WaitPolicy(timeout_ms=2000))
#   ConditionWaiter(policy).until(predicate, "login button visible")
#
# This layer never logs; callers translate and report.
#
# ================================================================================

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Optional, Tuple, Type

from .exceptions import (
    ElementNotFoundError,
    FrameNotFoundError,
    StaleElementError,
    WaitTimeoutError,
)


Predicate = Callable[[], object]

# Lookups race page transitions; these failures just mean "not yet"
DEFAULT_IGNORED_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    ElementNotFoundError,
    StaleElementError,
    FrameNotFoundError,
)

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_POLL_INTERVAL_MS = 250


@dataclass
class WaitPolicy:
    """
    Configuration for wait operations.

    Attributes:
        timeout_ms: Total time budget in milliseconds
        poll_interval_ms: Pause between evaluations in milliseconds
        ignored_exceptions: Exception types treated as "condition not met yet"
    """
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    ignored_exceptions: Tuple[Type[BaseException], ...] = field(
        default=DEFAULT_IGNORED_EXCEPTIONS
    )

    def __post_init__(self) -> None:
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {self.timeout_ms}")
        if self.poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be > 0, got {self.poll_interval_ms}")
        self.ignored_exceptions = tuple(self.ignored_exceptions)

    def ignoring(self, *exception_types: Type[BaseException]) -> "WaitPolicy":
        """Return a copy that also ignores `exception_types`."""
        extra = tuple(t for t in exception_types if t not in self.ignored_exceptions)
        return replace(self, ignored_exceptions=self.ignored_exceptions + extra)

    def copy(self) -> "WaitPolicy":
        return replace(self)


# Pre-configured policies for common scenarios
WAIT_PRESETS: Dict[str, WaitPolicy] = {
    "default": WaitPolicy(),
    # Quick presence checks on already-loaded pages
    "fast": WaitPolicy(timeout_ms=1000, poll_interval_ms=50),
    # Full page transitions
    "page_load": WaitPolicy(timeout_ms=30000, poll_interval_ms=500),
}


def get_wait_policy(preset: str) -> WaitPolicy:
    """
    Get a fresh copy of a preset wait policy.

    Args:
        preset: Preset name (e.g., "fast", "page_load")

    Returns:
        WaitPolicy for the preset, or the default if not found
    """
    return WAIT_PRESETS.get(preset, WAIT_PRESETS["default"]).copy()


class ConditionWaiter:
    """
    Repeatedly evaluates a predicate until it holds or the policy times out.

    The policy is snapshotted when a wait starts, so changing it while a wait
    is running has no effect on that wait.

    Example:
        waiter = ConditionWaiter(WaitPolicy(timeout_ms=500, poll_interval_ms=50))
        waiter.until(lambda: session.title() == "Home", "title is 'Home'")
    """

    def __init__(
        self,
        policy: Optional[WaitPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the waiter.

        Args:
            policy: Wait policy (defaults to WaitPolicy())
            clock: Monotonic clock returning seconds
            sleep: Sleeper accepting seconds
        """
        self.policy = policy or WaitPolicy()
        self._clock = clock
        self._sleep = sleep

    def until(self, predicate: Predicate, description: str = "condition") -> None:
        """
        Block until `predicate()` returns a truthy value.

        Args:
            predicate: Zero-argument callable
            description: Human-readable description used in the timeout message

        Raises:
            WaitTimeoutError: If the policy's timeout elapses first
            Exception: Anything raised by the predicate that is not ignored
        """
        timeout = self.policy.timeout_ms / 1000.0
        interval = self.policy.poll_interval_ms / 1000.0
        ignored = self.policy.ignored_exceptions

        start = self._clock()
        deadline = start + timeout
        last_error: Optional[BaseException] = None
        attempts = 0

        while True:
            attempts += 1
            try:
                if predicate():
                    return
            except ignored as e:
                last_error = e

            now = self._clock()
            if now >= deadline:
                elapsed_ms = int((now - start) * 1000)
                message = (
                    f"Timed out after {elapsed_ms}ms ({attempts} attempts) "
                    f"waiting for: {description}"
                )
                if last_error is not None:
                    message += f". Last error: {last_error}"
                raise WaitTimeoutError(message, last_error=last_error) from last_error

            self._sleep(min(interval, deadline - now))


def wait_until(
    predicate: Predicate,
    policy: Optional[WaitPolicy] = None,
    description: str = "condition",
) -> None:
    """
    Convenience wrapper around ConditionWaiter(policy).until(...).

    Args:
        predicate: Zero-argument callable
        policy: Wait policy (defaults to WaitPolicy())
        description: Human-readable description for the timeout message

    Raises:
        WaitTimeoutError: If the timeout is reached without success
    """
    ConditionWaiter(policy).until(predicate, description)


__all__ = [
    "ConditionWaiter",
    "DEFAULT_IGNORED_EXCEPTIONS",
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_TIMEOUT_MS",
    "WAIT_PRESETS",
    "WaitPolicy",
    "get_wait_policy",
    "wait_until",
]
