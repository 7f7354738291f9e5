"""
Turn class and method names into readable text for messages and reports.

    humanize("HomePage")            -> "Home page"
    humanize("should_open_the_app") -> "Should open the app"
    underscore("Home page")         -> "home_page"
"""

import re

_UPPERCASE = re.compile(r"([A-Z])")


def split_camel_case(name: str) -> str:
    """Insert a space before every uppercase letter."""
    return re.sub(r"\s+", " ", _UPPERCASE.sub(r" \1", name)).strip()


def humanize(name: str) -> str:
    """Convert a class or method name into a sentence-cased phrase."""
    # Already a phrase
    if " " in name and ":" not in name:
        return name
    words = split_camel_case(name.replace("_", " ")).lower()
    return words[:1].upper() + words[1:]


def underscore(name: str) -> str:
    return name.replace(" ", "_").lower().strip()


__all__ = ["humanize", "split_camel_case", "underscore"]
