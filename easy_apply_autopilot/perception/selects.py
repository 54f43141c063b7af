"""Dropdown detection"""

import logging

from easy_apply_autopilot.errors import DocumentError
from easy_apply_autopilot.models import Question, QuestionKind
from easy_apply_autopilot.reasoning.normalize import is_placeholder_option
from easy_apply_autopilot.reasoning.resolver import default_choice

logger = logging.getLogger(__name__)


def extract_dropdown_questions(document, discovery=False, after_change=None):
    """
    One Question per select control with its full option list.

    Options are surfaced to inference truncated (see Question.surfaced_options).
    Discovery moves a select still on its placeholder to the same option the
    resolver would default to.
    """
    questions = []
    for select in document.select_fields():
        if not select.options:
            continue
        question = Question(
            label=select.label,
            kind=QuestionKind.DROPDOWN,
            options=tuple(select.options),
            required=select.required,
            current_value=select.selected,
        )
        questions.append(question)
        on_placeholder = select.selected_index < 0 or (
            select.selected_index == 0 and is_placeholder_option(select.options[0])
        )
        choice = default_choice(question)
        if discovery and on_placeholder and choice and choice != select.selected:
            try:
                document.apply_value(select, choice)
                if after_change:
                    after_change()
            except DocumentError as e:
                logger.warning(f"⚠️ Could not preselect '{select.label}': {e}")
    return questions
