"""
================================================================================
Run Configuration
================================================================================

Typed, immutable view of the settings that drive a test run.

Sources (highest to lowest priority): environment variables, the YAML file
loaded by ConfigLoader, built-in defaults.

    webdriver.driver            chromium | firefox | webkit (any case)
    webdriver.base_url          system-wide default start URL
    webdriver.headless          launch browsers headless
    webdriver.unique_browser    one browser for the whole run
    waits.element_timeout_ms    default wait timeout (5000)
    waits.polling_interval_ms   default poll interval (250)
    resources.dirs              directories searched for `resource:` URLs

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .common.config_loader import ConfigLoader
from .exceptions import UnsupportedDriverError
from .wait_helpers import DEFAULT_POLL_INTERVAL_MS, DEFAULT_TIMEOUT_MS, WaitPolicy


DEFAULT_DRIVER = "chromium"
DEFAULT_RESOURCE_DIRS = ("resources",)


class SupportedDriver(Enum):
    """Browsers a session can be launched in."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

    @classmethod
    def list_of_supported_drivers(cls) -> str:
        return ", ".join(driver.value for driver in cls)

    @classmethod
    def lookup(cls, name: str) -> "SupportedDriver":
        """
        Case-insensitive lookup by name.

        Raises:
            UnsupportedDriverError: If the name is not a supported browser
        """
        normalized = (name or "").strip().lower()
        for driver in cls:
            if driver.value == normalized:
                return driver
        raise UnsupportedDriverError(
            f"{name} is not a supported browser. "
            f"Supported driver values are: {cls.list_of_supported_drivers()}"
        )


@dataclass(frozen=True)
class Configuration:
    driver: SupportedDriver = SupportedDriver.CHROMIUM
    base_url: Optional[str] = None
    headless: bool = True
    unique_browser: bool = False
    element_timeout_ms: int = DEFAULT_TIMEOUT_MS
    polling_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    resource_dirs: Tuple[str, ...] = field(default=DEFAULT_RESOURCE_DIRS)

    @classmethod
    def load(cls, loader: Optional[ConfigLoader] = None) -> "Configuration":
        """
        Build a Configuration from ConfigLoader.

        Args:
            loader: ConfigLoader to read from (defaults to the singleton)

        Raises:
            UnsupportedDriverError: If webdriver.driver names an unknown browser
        """
        config = loader or ConfigLoader()
        base_url = config.get("webdriver.base_url", None)
        return cls(
            driver=SupportedDriver.lookup(config.get("webdriver.driver", DEFAULT_DRIVER)),
            base_url=base_url or None,
            headless=bool(config.get("webdriver.headless", True)),
            unique_browser=bool(config.get("webdriver.unique_browser", False)),
            element_timeout_ms=int(
                config.get("waits.element_timeout_ms", DEFAULT_TIMEOUT_MS)
            ),
            polling_interval_ms=int(
                config.get("waits.polling_interval_ms", DEFAULT_POLL_INTERVAL_MS)
            ),
            resource_dirs=tuple(
                config.get("resources.dirs", list(DEFAULT_RESOURCE_DIRS))
            ),
        )

    def default_wait_policy(self) -> WaitPolicy:
        return WaitPolicy(
            timeout_ms=self.element_timeout_ms,
            poll_interval_ms=self.polling_interval_ms,
        )


__all__ = ["Configuration", "SupportedDriver"]
