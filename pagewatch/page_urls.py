"""
================================================================================
Page URL Resolution
================================================================================

Decides where a page object (or a page registry) should navigate to when it
is opened.

Resolution order:
    1. The page's own DEFAULT_URL, if declared
    2. The system-wide default (webdriver.base_url / WEBDRIVER_BASE_URL)
    3. The default URL set on the page registry
    4. Nothing: no navigation takes place

URLs starting with `resource:` name a file bundled with the test suite and
are turned into `file://` URIs by searching the configured resource
directories in order.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .configuration import Configuration
from .exceptions import ConfigurationError


RESOURCE_PREFIX = "resource:"


class PageUrls:
    """
    URL policy for one configuration.

    Args:
        configuration: Run configuration (system default URL, resource dirs)
        search_root: Directory relative resource dirs are resolved against
                     (defaults to the current working directory)
    """

    def __init__(self, configuration: Configuration, search_root: Optional[Path] = None):
        self.configuration = configuration
        self.search_root = Path(search_root) if search_root else Path.cwd()

    @property
    def system_default_url(self) -> Optional[str]:
        return self.configuration.base_url or None

    def starting_url(
        self,
        explicit_url: Optional[str] = None,
        registry_default_url: Optional[str] = None,
    ) -> Optional[str]:
        """
        Resolve the URL to open.

        Args:
            explicit_url: URL declared on the page itself
            registry_default_url: Default URL set on the page registry

        Returns:
            Absolute URL, or None when nothing is configured
        """
        url = explicit_url or self.system_default_url or registry_default_url
        if not url:
            return None
        return self.resolve(url)

    def resolve(self, url: str) -> str:
        """Expand `resource:` URLs; return anything else unchanged."""
        if not url.startswith(RESOURCE_PREFIX):
            return url
        return self._resource_uri(url[len(RESOURCE_PREFIX):].lstrip("/"))

    def _resource_uri(self, relative_path: str) -> str:
        searched = []
        for directory in self.configuration.resource_dirs:
            base = Path(directory)
            if not base.is_absolute():
                base = self.search_root / base
            candidate = base / relative_path
            searched.append(str(base))
            if candidate.is_file():
                return candidate.resolve().as_uri()
        raise ConfigurationError(
            f"Bundled resource not found: {relative_path} "
            f"(searched: {', '.join(searched) or 'no resource directories configured'})"
        )


__all__ = ["PageUrls", "RESOURCE_PREFIX"]
