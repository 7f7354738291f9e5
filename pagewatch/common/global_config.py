"""
================================================================================
Logging Configuration
================================================================================

Centralized Loguru setup for pagewatch and the test suites built on it.

Features:
    - One-time sink configuration from the `logging` section
    - Optional rotating file sink
    - Explicit override arguments for runners

Author: Automation Team
License: MIT
================================================================================
"""

import sys
from pathlib import Path

from loguru import logger

from .config_loader import ConfigLoader


DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)

_sinks_configured: bool = False


def init_logger(level: str = None, format_str: str = None, log_file: str = None) -> None:
    """
    Point loguru at stderr (and optionally a rotating file) using the `logging` settings.

    Safe to call more than once; only the first call configures sinks.

    Args:
        level: Minimum level; logging.level when omitted
        format_str: Record format; logging.format when omitted
        log_file: Rotating log file; logging.file when omitted, none if unset
    """
    global _sinks_configured

    if _sinks_configured:
        return

    config = ConfigLoader()
    log_level = (level or config.get("logging.level", "INFO")).upper()
    log_format = format_str or config.get("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    log_file = log_file or config.get("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=config.get("logging.rotation", "10 MB"),
            retention=config.get("logging.retention", "7 days"),
        )

    _sinks_configured = True
    logger.debug(f"Log sinks configured at {log_level}")


def get_logger():
    """The shared loguru logger, configuring sinks on first use."""
    if not _sinks_configured:
        init_logger()
    return logger


def reset_logger() -> None:
    """Forget the previous setup so the next init_logger() call reconfigures sinks."""
    global _sinks_configured
    _sinks_configured = False
