"""
================================================================================
Configuration Loader
================================================================================

Reads the pagewatch settings file and lets environment variables override
individual keys.

Lookup order for `get("webdriver.base_url", default)`:
    1. $WEBDRIVER_BASE_URL, coerced to the type of `default`
    2. webdriver -> base_url in the YAML file
    3. default

The file is config/config.yaml unless $PAGEWATCH_CONFIG names another one.
A missing file is allowed; a malformed one is a ConfigurationError.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml
from loguru import logger

from ..exceptions import ConfigurationError


CONFIG_PATH_ENV = "PAGEWATCH_CONFIG"
DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"

_TRUTHY = ("true", "1", "yes", "on")


def default_config_path() -> Path:
    return Path(os.getenv(CONFIG_PATH_ENV, str(DEFAULT_CONFIG_PATH)))


def env_key_for(key: str) -> str:
    """Environment variable overriding `key`: waits.polling_interval_ms -> WAITS_POLLING_INTERVAL_MS."""
    return key.upper().replace(".", "_")


def _coerce(raw: str, like: Any, env_key: str) -> Any:
    """Turn an environment string into the type of the caller's default."""
    if like is None or isinstance(like, str):
        return raw
    # bool before int: bool is an int subclass
    if isinstance(like, bool):
        return raw.strip().lower() in _TRUTHY
    if isinstance(like, (int, float)):
        number_type = type(like)
        try:
            return number_type(raw)
        except ValueError:
            raise ConfigurationError(
                f"{env_key}={raw!r} is not a valid {number_type.__name__}"
            ) from None
    if isinstance(like, (list, tuple)):
        return [entry for entry in raw.split(os.pathsep) if entry]
    return raw


def _dig(tree: Dict[str, Any], parts: Iterable[str]) -> Any:
    node: Any = tree
    for part in parts:
        if not isinstance(node, dict) or node.get(part) is None:
            return None
        node = node[part]
    return node


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug(f"No configuration file at {path}; using defaults and environment")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Could not parse {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} must hold a mapping at the top level, not {type(data).__name__}"
        )
    logger.debug(f"Configuration read from {path}")
    return data


class ConfigLoader:
    """
    Process-wide settings reader.

    Usage:
        loader = ConfigLoader()
        loader.get("webdriver.driver", "chromium")
        loader.get("resources.dirs", ["resources"])   # RESOURCES_DIRS splits on os.pathsep
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._ready = False
            cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: Settings file; default_config_path() when omitted.
                         Ignored once the singleton exists.
        """
        if self._ready:
            return
        self._config_path = Path(config_path) if config_path else default_config_path()
        self._data = _read_yaml(self._config_path)
        self._ready = True

    @property
    def config_path(self) -> Path:
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        env_key = env_key_for(key)
        raw = os.environ.get(env_key)
        if raw is not None:
            return _coerce(raw, default, env_key)

        value = _dig(self._data, key.split("."))
        return default if value is None else value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Whole top-level section from the file; {} when absent."""
        return self._data.get(section) or {}

    def reload(self) -> None:
        self._data = _read_yaml(self._config_path)
        logger.info(f"Configuration reloaded from {self._config_path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton so the next ConfigLoader() reads the file again."""
        cls._instance = None


__all__ = [
    "CONFIG_PATH_ENV",
    "ConfigLoader",
    "default_config_path",
    "env_key_for",
]
