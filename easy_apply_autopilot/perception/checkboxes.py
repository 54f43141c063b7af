"""Checkbox detection and classification"""

import logging

from easy_apply_autopilot.data.answer_bank import (
    MANDATORY_CHECKBOX_KEYWORDS,
    OPT_IN_CHECKBOX_KEYWORDS,
)
from easy_apply_autopilot.models import Question, QuestionKind

logger = logging.getLogger(__name__)


def is_opt_in(checkbox):
    """Marketing and follow-company opt-ins are never checked automatically"""
    lowered = checkbox.label.lower()
    return any(keyword in lowered for keyword in OPT_IN_CHECKBOX_KEYWORDS)


def is_mandatory(checkbox):
    """Required, or worded like a consent the form will not proceed without"""
    if is_opt_in(checkbox):
        return False
    if checkbox.required:
        return True
    lowered = checkbox.label.lower()
    return any(keyword in lowered for keyword in MANDATORY_CHECKBOX_KEYWORDS)


def extract_checkbox_questions(document):
    return [
        Question(
            label=checkbox.label,
            kind=QuestionKind.CHECKBOX,
            required=is_mandatory(checkbox),
            current_value="true" if checkbox.checked else "",
        )
        for checkbox in document.checkboxes()
        if checkbox.label
    ]
