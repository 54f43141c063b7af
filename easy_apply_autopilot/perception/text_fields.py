"""Text input detection"""

import logging

from easy_apply_autopilot.data.answer_bank import DEFAULT_FIELDS, DISCOVERY_FIELD
from easy_apply_autopilot.errors import DocumentError
from easy_apply_autopilot.models import Question, QuestionKind

logger = logging.getLogger(__name__)


def extract_text_questions(document, discovery=False, after_change=None):
    """
    One Question per labeled text input on the step, in document order.

    In discovery mode an empty input is given a placeholder value so the
    step can be probed without tripping required-field validation.
    """
    questions = []
    for handle in document.text_fields():
        if not handle.label:
            continue
        questions.append(
            Question(
                label=handle.label,
                kind=QuestionKind.TEXT_INPUT,
                required=handle.required,
                current_value=handle.value,
            )
        )
        if discovery and not handle.value.strip():
            try:
                document.apply_value(handle, DEFAULT_FIELDS[DISCOVERY_FIELD])
                if after_change:
                    after_change()
            except DocumentError as e:
                logger.warning(f"⚠️ Could not prefill '{handle.label}': {e}")
    return questions
