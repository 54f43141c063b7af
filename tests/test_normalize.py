"""Text normalization tests"""

import pytest

from easy_apply_autopilot.reasoning.normalize import (
    clean_label,
    is_placeholder_option,
    normalize_answer_key,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Mobile   phone\nnumber ", "Mobile phone number"),
        ("Email address Email address", "Email address"),
        ("CityCity", "City"),
        ("A", "A"),
        ("", ""),
    ],
)
def test_clean_label(raw, expected):
    assert clean_label(raw) == expected


@pytest.mark.parametrize("option", ["Select an option", "Please select", "", "Choose"])
def test_placeholder_options(option):
    assert is_placeholder_option(option)


def test_real_option_is_not_placeholder():
    assert not is_placeholder_option("Bachelor's degree")


def test_normalize_answer_key_strips_prompt_decorations():
    assert normalize_answer_key("question: Degree || options: BSc, MSc") == "Degree"
    assert normalize_answer_key("  Phone ") == "Phone"
