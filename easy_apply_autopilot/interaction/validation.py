"""
Fill-mode validation pass

Applies resolved answers to every field on the current step, in the order
the form's own validation expects them:
  1. safety reminder check
  2. text inputs
  3. empty city/location inputs (typeahead fields often drop the first fill)
  4. mandatory / consent checkboxes (opt-ins are left alone)
  5. radio groups
  6. dropdowns

Each field is handled independently; a failure is logged and skipped.
"""

import logging

from easy_apply_autopilot.data.answer_bank import DEFAULT_FIELDS
from easy_apply_autopilot.models import Question, QuestionKind
from easy_apply_autopilot.perception.checkboxes import is_mandatory, is_opt_in

logger = logging.getLogger(__name__)

CITY_KEYWORDS = ("city", "location")


class ValidationPass:
    def __init__(self, document, resolver, pacer=None):
        self.document = document
        self.resolver = resolver
        self.pacer = pacer

    def _pace(self):
        if self.pacer:
            self.pacer.very_short()

    def _apply(self, handle, value):
        if self.document.apply_value(handle, value):
            self._pace()
            return True
        logger.warning(f"⚠️ Value did not take for '{handle.label}'")
        self._pace()
        return False

    def run(self, prefill):
        """Returns the number of fields changed"""
        changed = 0
        if self.document.dismiss_safety_reminder():
            self._pace()

        changed += self._fill_text_fields(prefill)
        changed += self._fill_empty_city_fields()
        changed += self._check_mandatory_checkboxes(prefill)
        changed += self._select_radios(prefill)
        changed += self._select_dropdowns(prefill)

        logger.info(f"Validation pass changed {changed} field(s)")
        return changed

    def _fill_text_fields(self, prefill):
        changed = 0
        for handle in self.document.text_fields():
            try:
                question = Question(handle.label, QuestionKind.TEXT_INPUT, required=handle.required)
                resolution = self.resolver.resolve(question, prefill)
                if resolution.value is None or resolution.value == handle.value:
                    continue
                logger.debug(f"  text '{handle.label}' <- '{resolution.value}' ({resolution.source})")
                changed += self._apply(handle, resolution.value)
            except Exception as e:
                logger.warning(f"⚠️ Error filling text field '{handle.label}': {e}")
        return changed

    def _fill_empty_city_fields(self):
        changed = 0
        for handle in self.document.text_fields():
            if handle.value.strip():
                continue
            if not any(keyword in handle.label.lower() for keyword in CITY_KEYWORDS):
                continue
            try:
                changed += self._apply(handle, DEFAULT_FIELDS["City"])
            except Exception as e:
                logger.warning(f"⚠️ Error filling city field '{handle.label}': {e}")
        return changed

    def _check_mandatory_checkboxes(self, prefill):
        changed = 0
        for box in self.document.checkboxes():
            if box.checked or is_opt_in(box):
                continue
            try:
                question = Question(box.label, QuestionKind.CHECKBOX, required=is_mandatory(box))
                if self.resolver.resolve(question, prefill).value:
                    logger.debug(f"  checkbox '{box.label}' <- checked")
                    changed += self._apply(box, True)
            except Exception as e:
                logger.warning(f"⚠️ Error checking '{box.label}': {e}")
        return changed

    def _select_radios(self, prefill):
        changed = 0
        for group in self.document.radio_groups():
            try:
                question = Question(
                    group.label, QuestionKind.RADIO_GROUP,
                    options=tuple(group.options), required=group.required,
                )
                resolution = self.resolver.resolve(question, prefill)
                if resolution.value is None or resolution.value == group.selected:
                    continue
                logger.debug(f"  radio '{group.label}' <- '{resolution.value}' ({resolution.source})")
                changed += self._apply(group, resolution.value)
            except Exception as e:
                logger.warning(f"⚠️ Error selecting radio '{group.label}': {e}")
        return changed

    def _select_dropdowns(self, prefill):
        changed = 0
        for select in self.document.select_fields():
            try:
                question = Question(
                    select.label, QuestionKind.DROPDOWN,
                    options=tuple(select.options), required=select.required,
                )
                resolution = self.resolver.resolve(question, prefill)
                if resolution.value is None or resolution.value == select.selected:
                    continue
                logger.debug(f"  dropdown '{select.label}' <- '{resolution.value}' ({resolution.source})")
                changed += self._apply(select, resolution.value)
            except Exception as e:
                logger.warning(f"⚠️ Error selecting dropdown '{select.label}': {e}")
        return changed
