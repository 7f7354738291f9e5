"""
In-memory stand-ins for the Session and Element protocols.

Scripted attributes take either a single value or a list of values; each read
consumes the next value and the last one repeats forever. A value that is an
exception (class or instance) is raised instead of returned.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pagewatch.exceptions import ElementNotFoundError
from pagewatch.locators import Locator


class Script:
    def __init__(self, values: Any):
        self._values = list(values) if isinstance(values, list) else [values]
        if not self._values:
            self._values = [None]
        self.reads = 0

    def next(self) -> Any:
        self.reads += 1
        value = self._values[0] if len(self._values) == 1 else self._values.pop(0)
        if isinstance(value, BaseException) or (
            isinstance(value, type) and issubclass(value, BaseException)
        ):
            raise value
        return value


class FakeElement:
    def __init__(
        self,
        displayed: Any = True,
        enabled: Any = True,
        text: Any = "",
        selected: bool = False,
        attached: bool = True,
        focused: Any = False,
        attributes: Optional[Dict[str, str]] = None,
        click_errors: Optional[List[BaseException]] = None,
        name: str = "element",
    ):
        self._displayed = Script(displayed)
        self._enabled = Script(enabled)
        self._text = Script(text)
        self._focused = Script(focused)
        self.selected = selected
        self.attached = attached
        self.attributes = dict(attributes or {})
        self.click_errors = list(click_errors or [])
        self.children: Dict[Optional[Locator], Script] = {}
        self.name = name

        self.click_count = 0
        self.clear_count = 0
        self.typed: List[str] = []
        self.pressed: List[str] = []
        self.selections: List[tuple] = []

    def with_children(self, *sequences: List["FakeElement"], locator: Optional[Locator] = None):
        """Script what find_elements() returns (for `locator`, or for any locator)."""
        self.children[locator] = Script(list(sequences))
        return self

    def is_displayed(self) -> bool:
        return self._displayed.next()

    def is_enabled(self) -> bool:
        return self._enabled.next()

    def is_selected(self) -> bool:
        return self.selected

    def is_attached(self) -> bool:
        return self.attached

    def has_focus(self) -> bool:
        return self._focused.next()

    @property
    def text(self) -> str:
        return self._text.next()

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def click(self) -> None:
        self.click_count += 1
        if self.click_errors:
            raise self.click_errors.pop(0)

    def clear(self) -> None:
        self.clear_count += 1
        self.attributes["value"] = ""

    def send_keys(self, value: str) -> None:
        self.typed.append(value)
        self.attributes["value"] = self.attributes.get("value", "") + value

    def press(self, key: str) -> None:
        self.pressed.append(key)

    def select_by_visible_text(self, label: str) -> None:
        self.selections.append(("text", label))

    def select_by_value(self, value: str) -> None:
        self.selections.append(("value", value))

    def select_by_index(self, index: int) -> None:
        self.selections.append(("index", index))

    def selected_option_text(self) -> str:
        return self.attributes.get("selected_text", "")

    def selected_option_value(self) -> str:
        return self.attributes.get("selected_value", "")

    def find_elements(self, locator: Locator) -> List["FakeElement"]:
        script = self.children.get(locator, self.children.get(None))
        if script is None:
            return []
        return list(script.next())

    def __repr__(self) -> str:
        return f"<FakeElement {self.name}>"


class FakeSession:
    def __init__(self, current_url: str = "about:blank", title: Any = ""):
        self.current_url = current_url
        self._title = Script(title)
        self._elements: Dict[Optional[Locator], Script] = {}
        self.navigated: List[str] = []
        self.closed = False
        self.find_calls = 0

    def with_elements(self, *sequences: List[FakeElement], locator: Optional[Locator] = None):
        """Script what find_elements() returns (for `locator`, or for any locator)."""
        self._elements[locator] = Script(list(sequences))
        return self

    def set_title(self, *titles: Any) -> None:
        self._title = Script(list(titles))

    def navigate(self, url: str) -> None:
        self.navigated.append(url)
        self.current_url = url

    def title(self) -> str:
        return self._title.next()

    def find_elements(self, locator: Locator) -> List[FakeElement]:
        self.find_calls += 1
        script = self._elements.get(locator, self._elements.get(None))
        if script is None:
            return []
        return list(script.next())

    def find_element(self, locator: Locator) -> FakeElement:
        elements = self.find_elements(locator)
        if not elements:
            raise ElementNotFoundError(f"Could not find an element matching {locator}")
        return elements[0]

    def close(self) -> None:
        self.closed = True


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
