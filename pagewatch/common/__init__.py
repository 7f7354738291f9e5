"""
================================================================================
pagewatch Common Utilities
================================================================================

Configuration loading and logging setup shared by pagewatch and its test
suites.

Usage:
    from pagewatch.common import ConfigLoader, init_logger

    init_logger()
    driver = ConfigLoader().get("webdriver.driver", "chromium")

================================================================================
"""

from .config_loader import ConfigLoader, default_config_path
from .global_config import get_logger, init_logger, reset_logger

__all__ = [
    "ConfigLoader",
    "default_config_path",
    "get_logger",
    "init_logger",
    "reset_logger",
]
