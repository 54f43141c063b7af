"""Radio group detection"""

import logging

from easy_apply_autopilot.errors import DocumentError
from easy_apply_autopilot.models import Question, QuestionKind

logger = logging.getLogger(__name__)


def extract_radio_questions(document, discovery=False, after_change=None):
    """
    One Question per radio fieldset, options in document order.
    Discovery pre-selects the first option of a group with no selection.
    """
    questions = []
    for group in document.radio_groups():
        if not group.label or not group.options:
            continue
        questions.append(
            Question(
                label=group.label,
                kind=QuestionKind.RADIO_GROUP,
                options=tuple(group.options),
                required=group.required,
                current_value=group.selected,
            )
        )
        if discovery and not group.selected:
            try:
                document.apply_value(group, group.options[0])
                if after_change:
                    after_change()
            except DocumentError as e:
                logger.warning(f"⚠️ Could not preselect '{group.label}': {e}")
    return questions
