import pytest

from pagewatch.element_facade import ElementFacade, RetryConfig, with_retry
from pagewatch.exceptions import (
    DriverError,
    ElementNotFoundError,
    ElementNotVisibleError,
    StaleElementError,
    UnexpectedElementVisibleError,
)
from pagewatch.locators import Locator
from pagewatch.wait_helpers import WaitPolicy
from testsuites.unit.fakes import FakeElement, FakeSession


QUICK = WaitPolicy(timeout_ms=200, poll_interval_ms=20)
FIELD = Locator.id("field")


def facade(element):
    return ElementFacade(element, policy=QUICK, name="field")


def test_needs_an_element_or_a_locator():
    with pytest.raises(ValueError):
        ElementFacade()


def test_get_text_value_prefers_rendered_text():
    assert facade(FakeElement(text="hello", attributes={"value": "42"})).get_text_value() == "hello"


def test_get_text_value_falls_back_to_value_attribute():
    assert facade(FakeElement(text="", attributes={"value": "42"})).get_text_value() == "42"


def test_get_text_value_is_empty_when_nothing_is_set():
    assert facade(FakeElement(text="")).get_text_value() == ""


def test_type_clears_the_field_first():
    element = FakeElement(attributes={"value": "old"})

    facade(element).type("new")

    assert element.clear_count == 1
    assert element.attributes["value"] == "new"


def test_type_and_enter_and_type_and_tab():
    element = FakeElement()

    facade(element).type_and_enter("query")
    facade(element).type_and_tab("next")

    assert element.pressed == ["Enter", "Tab"]
    assert element.typed == ["query", "next"]


def test_actions_wait_until_the_element_is_enabled():
    element = FakeElement(enabled=[False, False, True])

    facade(element).click()

    assert element.click_count == 1


def test_action_on_a_disabled_element_times_out():
    element = FakeElement(enabled=False)

    with pytest.raises(ElementNotVisibleError):
        facade(element).click()

    assert element.click_count == 0


def test_click_is_retried_once_on_driver_failure():
    element = FakeElement(click_errors=[DriverError("overlay")])

    facade(element).click()

    assert element.click_count == 2


def test_click_failing_twice_propagates():
    element = FakeElement(click_errors=[DriverError("first"), DriverError("second")])

    with pytest.raises(DriverError, match="second"):
        facade(element).click()

    assert element.click_count == 2


def test_click_retry_looks_the_locator_up_again():
    stale = FakeElement(click_errors=[StaleElementError("node detached")], name="stale")
    fresh = FakeElement(name="fresh")
    # enabled check, first click, retried click
    session = FakeSession().with_elements([stale], [stale], [fresh], locator=FIELD)

    ElementFacade.located(session, FIELD, policy=QUICK).click()

    assert stale.click_count == 1
    assert fresh.click_count == 1


def test_with_retry_only_retries_configured_types():
    calls = []

    @with_retry(RetryConfig(max_attempts=3, delay_seconds=0, retry_on=(KeyError,)))
    def flaky():
        calls.append(1)
        raise ValueError("not retried")

    with pytest.raises(ValueError):
        flaky()

    assert len(calls) == 1


def test_selects_record_the_requested_option():
    element = FakeElement(attributes={"selected_text": "Blue", "selected_value": "b"})
    field = facade(element)

    field.select_by_visible_text("Blue").select_by_value("b").select_by_index(2)

    assert element.selections == [("text", "Blue"), ("value", "b"), ("index", 2)]
    assert field.get_selected_visible_text_value() == "Blue"
    assert field.get_selected_value() == "b"


def test_queries_wait_for_visibility():
    element = FakeElement(displayed=[False, True], text="ready", selected=True)

    assert facade(element).get_text() == "ready"
    assert facade(element).is_selected() is True


def test_is_visible_never_raises_for_missing_or_stale_elements():
    missing = ElementFacade.located(FakeSession(), FIELD, policy=QUICK)
    stale = facade(FakeElement(displayed=StaleElementError))

    assert missing.is_visible() is False
    assert missing.is_currently_visible() is False
    assert stale.is_visible() is False
    assert missing.is_currently_enabled() is False
    assert missing.has_focus() is False


def test_is_present_uses_the_attached_state():
    assert facade(FakeElement(attached=True)).is_present() is True
    assert facade(FakeElement(attached=False)).is_present() is False

    session = FakeSession().with_elements([FakeElement(displayed=False)], locator=FIELD)
    assert ElementFacade.located(session, FIELD).is_present() is True
    assert ElementFacade.located(FakeSession(), FIELD).is_present() is False


def test_located_facade_reresolves_on_every_access():
    session = FakeSession().with_elements(
        [FakeElement(text="before")], [FakeElement(text="after")], locator=FIELD
    )
    field = ElementFacade.located(session, FIELD, policy=QUICK)

    assert field.contains_text("before")
    assert field.contains_text("after")


def test_should_be_visible_names_the_element():
    with pytest.raises(AssertionError, match="field should be visible"):
        facade(FakeElement(displayed=False)).should_be_visible()

    facade(FakeElement(displayed=True)).should_be_visible()
    facade(FakeElement(displayed=False)).should_not_be_visible()


def test_visibility_assertions_follow_changing_state():
    element = FakeElement(displayed=[True, False])
    field = facade(element)

    field.should_be_currently_visible()
    field.should_not_be_currently_visible()


def test_text_and_state_assertions():
    field = facade(FakeElement(text="red green blue", enabled=True))

    field.should_contain_text("green")
    field.should_not_contain_text("orange")
    field.should_be_enabled()
    with pytest.raises(AssertionError, match="'orange' was not found"):
        field.should_contain_text("orange")
    with pytest.raises(AssertionError):
        field.should_not_be_enabled()


def test_presence_assertions():
    facade(FakeElement(attached=True)).should_be_present()
    facade(FakeElement(attached=False)).should_not_be_present()
    with pytest.raises(AssertionError, match="should be present"):
        facade(FakeElement(attached=False)).should_be_present()


def test_wait_until_visible_reports_the_underlying_cause():
    missing = ElementFacade.located(FakeSession(), FIELD, policy=QUICK)

    with pytest.raises(ElementNotVisibleError, match="Could not find an element matching id=field") as error:
        missing.wait_until_visible()

    assert isinstance(error.value.last_error, ElementNotFoundError)


def test_wait_until_not_visible_raises_unexpected_visible():
    with pytest.raises(UnexpectedElementVisibleError):
        facade(FakeElement(displayed=True)).wait_until_not_visible()

    facade(FakeElement(displayed=[True, False])).wait_until_not_visible()


def test_wait_until_disabled():
    facade(FakeElement(enabled=[True, False])).wait_until_disabled()

    with pytest.raises(ElementNotVisibleError):
        facade(FakeElement(enabled=True)).wait_until_disabled()


def test_fluent_helpers_return_the_same_facade():
    field = facade(FakeElement())
    assert field.and_() is field
    assert field.then() is field
    assert field.and_().then() is field
