import pytest

from pagewatch import conditions
from pagewatch.exceptions import ElementNotFoundError, StaleElementError
from pagewatch.locators import Locator
from testsuites.unit.fakes import FakeElement, FakeSession


BUTTON = Locator.id("button")


def test_resolver_for_refinds_the_element_on_every_call():
    first, second = FakeElement(name="first"), FakeElement(name="second")
    session = FakeSession().with_elements([first], [second], locator=BUTTON)
    resolve = conditions.resolver_for(session, BUTTON)

    assert resolve() is first
    assert resolve() is second


def test_positive_predicates_let_lookup_failures_propagate():
    session = FakeSession()
    resolve = conditions.resolver_for(session, BUTTON)

    with pytest.raises(ElementNotFoundError):
        conditions.is_displayed(resolve)()
    with pytest.raises(ElementNotFoundError):
        conditions.is_enabled(resolve)()


def test_negated_predicates_treat_missing_or_stale_as_complement():
    missing = conditions.resolver_for(FakeSession(), BUTTON)
    stale = conditions.resolver_of(
        FakeElement(displayed=StaleElementError, enabled=StaleElementError, text=StaleElementError)
    )

    assert conditions.is_not_displayed(missing)()
    assert conditions.is_not_displayed(stale)()
    assert conditions.is_not_enabled(stale)()
    assert conditions.does_not_contain_text(stale, "x")()


def test_negations_are_evaluated_fresh_each_time():
    element = FakeElement(displayed=[True, False])
    predicate = conditions.is_not_displayed(conditions.resolver_of(element))

    assert predicate() is False
    assert predicate() is True


def test_contains_text_is_case_sensitive():
    resolve = conditions.resolver_of(FakeElement(text="Red Green Blue"))

    assert conditions.contains_text(resolve, "Green")()
    assert not conditions.contains_text(resolve, "green")()
    assert conditions.does_not_contain_text(resolve, "green")()


def test_title_predicates():
    session = FakeSession(title="Search results for pagewatch")

    assert conditions.title_contains(session, "pagewatch")()
    assert not conditions.title_equals(session, "Search")()
    assert conditions.title_does_not_equal(session, "Search")()


def test_first_displayed_checks_only_the_first_match():
    hidden, shown = FakeElement(displayed=False), FakeElement(displayed=True)
    session = FakeSession().with_elements([hidden, shown], locator=BUTTON)

    assert conditions.first_displayed(session, BUTTON)() is False


def test_none_displayed_counts_stale_elements_as_hidden():
    session = FakeSession().with_elements(
        [FakeElement(displayed=StaleElementError), FakeElement(displayed=False)],
        locator=BUTTON,
    )

    assert conditions.none_displayed(session, BUTTON)()
    assert conditions.none_displayed(FakeSession(), BUTTON)()


def test_none_displayed_is_false_while_any_element_shows():
    session = FakeSession().with_elements(
        [FakeElement(displayed=False), FakeElement(displayed=True)], locator=BUTTON
    )
    assert conditions.none_displayed(session, BUTTON)() is False


def test_text_present_needs_a_displayed_match():
    text_locator = Locator.containing_text("Welcome")
    session = FakeSession().with_elements(
        [FakeElement(displayed=False)], [FakeElement(displayed=True)], locator=text_locator
    )

    assert conditions.text_present(session, "Welcome")() is False
    assert conditions.text_present(session, "Welcome")() is True
    assert conditions.text_absent(session, "Welcome")() is False


def test_any_of_succeeds_past_a_failing_candidate():
    def missing():
        raise ElementNotFoundError("missing")

    assert conditions.any_of([missing, lambda: True])()


def test_any_of_reraises_transient_failure_when_nothing_holds():
    def missing():
        raise ElementNotFoundError("missing")

    with pytest.raises(ElementNotFoundError):
        conditions.any_of([missing, lambda: False])()

    assert conditions.any_of([lambda: False, lambda: False])() is False
