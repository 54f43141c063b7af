"""Answer resolution tests"""

import pytest

from easy_apply_autopilot.data.answer_cache import INPUT_FIELDS_KEY, RADIO_BUTTONS_KEY
from easy_apply_autopilot.debug import unresolved_collector
from easy_apply_autopilot.models import Question, QuestionKind
from easy_apply_autopilot.reasoning.resolver import CACHE, DEFAULT, PREFILL, UNRESOLVED


def text(label):
    return Question(label, QuestionKind.TEXT_INPUT)


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Mobile phone number", "555-123-4567"),
        ("Phone", "555-123-4567"),
        ("Email address", "john.doe@example.com"),
        ("First name", "John"),
        ("Given name", "John"),
        ("Last name", "Doe"),
        ("Family name", "Doe"),
        ("City", "New York"),
        ("Current location", "New York"),
        ("How many years of work experience do you have with Python?", "5"),
    ],
)
def test_text_defaults_follow_label_rules(resolver, label, expected):
    resolution = resolver.resolve(text(label))
    assert resolution.value == expected
    assert resolution.source == DEFAULT


def test_rule_order_is_significant(resolver):
    # "phone" outranks "email", "first" outranks "location"
    assert resolver.resolve(text("Phone or email")).value == "555-123-4567"
    assert resolver.resolve(text("First location preference")).value == "John"


def test_priority_prefill_over_cache_over_default(resolver, cache):
    question = text("Phone")
    cache.put(question, "111-111-1111")

    resolution = resolver.resolve(question, {"Phone": "999-999-9999"})
    assert resolution == ("999-999-9999", PREFILL)

    resolution = resolver.resolve(question, {})
    assert resolution == ("111-111-1111", CACHE)


def test_prefill_is_never_cached(resolver, store):
    resolver.resolve(text("Salary"), {"Salary": "100000"})
    assert store.get(INPUT_FIELDS_KEY)[INPUT_FIELDS_KEY] is None


def test_cache_convergence(resolver, cache):
    question = text("Years of Java")
    first = resolver.resolve(question)
    second = resolver.resolve(question)
    assert first.value == second.value == "5"
    assert first.source == DEFAULT
    assert second.source == CACHE
    assert cache.times_reused("Years of Java") == 1


def test_radio_default_is_first_option_and_cached(resolver, store):
    question = Question("Sponsorship?", QuestionKind.RADIO_GROUP, options=("No", "Yes"))
    assert resolver.resolve(question) == ("No", DEFAULT)
    assert resolver.resolve(question) == ("No", CACHE)
    assert store.get(RADIO_BUTTONS_KEY)[RADIO_BUTTONS_KEY] == [
        {"label": "Sponsorship?", "selectedOption": "No"}
    ]


def test_dropdown_default_skips_placeholder(resolver):
    question = Question(
        "Degree", QuestionKind.DROPDOWN, options=("Select an option", "Bachelor", "Master")
    )
    assert resolver.resolve(question).value == "Bachelor"

    no_placeholder = Question("Level", QuestionKind.DROPDOWN, options=("Junior", "Senior"))
    assert resolver.resolve(no_placeholder).value == "Junior"


def test_prefill_choice_matches_option_text_loosely(resolver):
    question = Question("Remote?", QuestionKind.RADIO_GROUP, options=("Yes", "No"))
    assert resolver.resolve(question, {"Remote?": "no"}) == ("No", PREFILL)


def test_prefill_not_among_options_falls_through(resolver):
    question = Question("Remote?", QuestionKind.RADIO_GROUP, options=("Yes", "No"))
    assert resolver.resolve(question, {"Remote?": "Maybe"}) == ("Yes", DEFAULT)


def test_stale_cached_option_is_replaced(resolver, cache):
    old = Question("Shift", QuestionKind.DROPDOWN, options=("Night", "Day"))
    cache.put(old, "Night")
    new = Question("Shift", QuestionKind.DROPDOWN, options=("Morning", "Evening"))
    assert resolver.resolve(new) == ("Morning", DEFAULT)
    assert cache.get(new) == "Morning"


def test_mandatory_checkbox_defaults_to_checked(resolver):
    assert resolver.resolve(Question("Terms", QuestionKind.CHECKBOX, required=True)).value is True
    assert resolver.resolve(Question("News", QuestionKind.CHECKBOX)).value is False


def test_choice_without_options_is_unresolved_and_recorded(resolver):
    unresolved_collector.enable()
    question = Question("Empty", QuestionKind.RADIO_GROUP)
    assert resolver.resolve(question) == UNRESOLVED
    [record] = unresolved_collector.pending()
    assert record["question_text"] == "Empty"
    assert record["kind"] == "radio_group"
