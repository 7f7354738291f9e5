"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the bundled static test site.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Its starting URL and URL pattern

Author: Automation Team
License: MIT
================================================================================
"""

from .index_page import IndexPage, OtherSitePage

__all__ = [
    "IndexPage",
    "OtherSitePage",
]
