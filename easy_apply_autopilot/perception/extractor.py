"""Field extraction across every kind on the current step"""

import logging

from easy_apply_autopilot.perception.checkboxes import extract_checkbox_questions
from easy_apply_autopilot.perception.radios import extract_radio_questions
from easy_apply_autopilot.perception.selects import extract_dropdown_questions
from easy_apply_autopilot.perception.text_fields import extract_text_questions

logger = logging.getLogger(__name__)


class FieldExtractor:
    """
    Scans the current step and returns its Questions, partitioned by kind in
    the order text inputs, radio groups, dropdowns, checkboxes.
    """

    def __init__(self, document, pacer=None):
        self.document = document
        self.pacer = pacer

    def _after_change(self):
        if self.pacer:
            self.pacer.very_short()

    def extract(self, discovery=False):
        questions = []
        for name, extract in (
            ("text inputs", extract_text_questions),
            ("radio groups", extract_radio_questions),
            ("dropdowns", extract_dropdown_questions),
        ):
            try:
                questions.extend(
                    extract(self.document, discovery=discovery, after_change=self._after_change)
                )
            except Exception as e:
                logger.warning(f"⚠️ Error extracting {name}: {e}")
        try:
            questions.extend(extract_checkbox_questions(self.document))
        except Exception as e:
            logger.warning(f"⚠️ Error extracting checkboxes: {e}")

        logger.info(f"Extracted {len(questions)} question(s) from step")
        for question in questions:
            logger.debug(f"  [{question.kind.value}] {question.describe()}")
        return questions
