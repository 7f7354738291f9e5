"""
================================================================================
Static Site Index Page Object
================================================================================

Page object for the bundled static test site
(`resources/static-site/index.html`).

The site has a few buttons that change the page after a short delay, which
is what the wait primitives are exercised against.

================================================================================
"""

from __future__ import annotations

import allure

from pagewatch import Locator, PageObject


class IndexPage(PageObject):
    """Index page of the bundled static site."""

    DEFAULT_URL = "resource:static-site/index.html"
    URL_PATTERN = r".*/static-site/index\.html"

    TITLE = "Home page"

    HEADING = Locator.id("title")
    INTRO = Locator.id("intro")
    SPLIT_TEXT = Locator.id("split")
    INVISIBLE_BLOCK = Locator.id("invisible")
    FIRST_NAME = Locator.id("firstname")
    LAST_NAME = Locator.id("lastname")
    COLOR = Locator.id("color")
    CHECKED = Locator.id("checked")
    UNCHECKED = Locator.id("unchecked")
    DISABLED_BUTTON = Locator.id("disabled-button")
    SHOW_LATER = Locator.id("show-later")
    LATE_ELEMENT = Locator.id("late")
    HIDE_SOON = Locator.id("hide-soon")
    VANISHING_ELEMENT = Locator.id("vanishing")
    CHANGE_TITLE = Locator.id("change-title")
    SHOW_MESSAGE = Locator.id("show-message")
    MESSAGES = Locator.id("messages")
    MISSING = Locator.id("does-not-exist")

    @allure.step("Reveal the late element")
    def reveal_late_element(self) -> "IndexPage":
        self.click_on(self.SHOW_LATER)
        return self

    @allure.step("Remove the vanishing element")
    def remove_vanishing_element(self) -> "IndexPage":
        self.click_on(self.HIDE_SOON)
        return self

    @allure.step("Change the page title")
    def change_title(self) -> "IndexPage":
        self.click_on(self.CHANGE_TITLE)
        return self

    @allure.step("Show the delayed message")
    def show_message(self) -> "IndexPage":
        self.click_on(self.SHOW_MESSAGE)
        return self

    def fill_in_name(self, first_name: str, last_name: str) -> "IndexPage":
        with allure.step(f"Fill in name: {first_name} {last_name}"):
            self.enter(first_name).into_field(self.FIRST_NAME)
            self.enter(last_name).into_field(self.LAST_NAME)
        return self


class OtherSitePage(PageObject):
    """A page the browser is never on; used for wrong-page checks."""

    URL_PATTERN = r"https://other\.example\.com/.*"
