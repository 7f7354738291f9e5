"""
Immutable element locators.

A Locator is a (strategy, value) pair that is turned into a Playwright
selector string every time it is resolved. Nothing here touches the browser.
"""

from __future__ import annotations

from dataclasses import dataclass


STRATEGIES = ("css", "xpath", "id", "name", "class_name", "tag", "text")


def xpath_literal(value: str) -> str:
    """Quote a string for use inside an XPath expression."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    # Both quote kinds present: stitch the pieces together with concat()
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


@dataclass(frozen=True)
class Locator:
    """
    Selector expression identifying zero or more DOM nodes.

    Usage:
        Locator.css("button.submit")
        Locator.id("username")
        Locator.xpath("//h2[.='A visible title']")
    """

    strategy: str
    value: str

    def __post_init__(self) -> None:
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unknown locator strategy: {self.strategy!r}. "
                f"Expected one of: {', '.join(STRATEGIES)}"
            )

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls("css", value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls("xpath", value)

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls("id", value)

    @classmethod
    def name(cls, value: str) -> "Locator":
        return cls("name", value)

    @classmethod
    def class_name(cls, value: str) -> "Locator":
        return cls("class_name", value)

    @classmethod
    def tag(cls, value: str) -> "Locator":
        return cls("tag", value)

    @classmethod
    def text(cls, value: str) -> "Locator":
        return cls("text", value)

    @classmethod
    def containing_text(cls, text: str) -> "Locator":
        """Elements owning a text node that contains `text` (case-sensitive)."""
        return cls.xpath(f".//*[text()[contains(., {xpath_literal(text)})]]")

    def to_selector(self) -> str:
        """Render as a Playwright selector string."""
        if self.strategy == "css":
            return self.value
        if self.strategy == "xpath":
            return f"xpath={self.value}"
        if self.strategy == "id":
            return f"[id={_css_string(self.value)}]"
        if self.strategy == "name":
            return f"[name={_css_string(self.value)}]"
        if self.strategy == "class_name":
            return f".{self.value}"
        if self.strategy == "tag":
            return self.value
        return f"text={_css_string(self.value)}"

    def __str__(self) -> str:
        return f"{self.strategy}={self.value}"


def _css_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


__all__ = ["Locator", "STRATEGIES", "xpath_literal"]
