"""
Answer resolution

Priority, strictly in this order, first hit wins:
  1. prefill  - exact label match in the attempt's PrefillMap
  2. cache    - exact label match in the persistent answer cache
  3. default  - label heuristic for text, first real option for choices

A default is written back to the cache so later encounters of the same
label are served from it. Prefill answers are never cached.
"""

import logging
from collections import namedtuple

from easy_apply_autopilot.data.answer_bank import DEFAULT_FIELDS, default_value_for_label
from easy_apply_autopilot.debug import unresolved_collector
from easy_apply_autopilot.models import QuestionKind
from easy_apply_autopilot.reasoning.normalize import is_placeholder_option, normalize_text

logger = logging.getLogger(__name__)

PREFILL = "prefill"
CACHE = "cache"
DEFAULT = "default"

Resolution = namedtuple("Resolution", ["value", "source"])

UNRESOLVED = Resolution(None, None)

_TRUTHY = {"true", "yes", "y", "1", "checked", "on"}


def match_option(value, options):
    """The option equal to value (exact first, then normalized), or None"""
    if value is None:
        return None
    value = str(value)
    if value in options:
        return value
    wanted = normalize_text(value)
    if not wanted:
        return None
    for option in options:
        if normalize_text(option) == wanted:
            return option
    return None


def default_choice(question):
    """First non-placeholder option: second dropdown entry behind a placeholder, else the first"""
    options = list(question.options)
    if not options:
        return None
    if (
        question.kind is QuestionKind.DROPDOWN
        and len(options) > 1
        and is_placeholder_option(options[0])
    ):
        return options[1]
    return options[0]


class AnswerResolver:
    def __init__(self, cache, fields=None, job_url=""):
        self.cache = cache
        self.fields = fields or DEFAULT_FIELDS
        self.job_url = job_url

    def resolve(self, question, prefill=None):
        prefill = prefill or {}
        if not question.label:
            return self._unresolved(question, "missing label")

        if question.kind is QuestionKind.TEXT_INPUT:
            return self._resolve_text(question, prefill)
        if question.kind is QuestionKind.CHECKBOX:
            return self._resolve_checkbox(question, prefill)
        return self._resolve_choice(question, prefill)

    def _resolve_text(self, question, prefill):
        value = prefill.get(question.label)
        if value not in (None, ""):
            return Resolution(str(value), PREFILL)

        cached = self.cache.get(question)
        if cached is not None:
            return Resolution(cached, CACHE)

        value = default_value_for_label(question.label, self.fields)
        self.cache.put(question, value)
        logger.debug(f"Default '{value}' for '{question.label}'")
        return Resolution(value, DEFAULT)

    def _resolve_choice(self, question, prefill):
        if not question.options:
            return self._unresolved(question, "no options")

        if question.label in prefill:
            option = match_option(prefill[question.label], question.options)
            if option is not None:
                return Resolution(option, PREFILL)
            logger.debug(
                f"Prefill '{prefill[question.label]}' is not an option of '{question.label}'"
            )

        cached = self.cache.get(question)
        if cached is not None:
            option = match_option(cached, question.options)
            if option is not None:
                return Resolution(option, CACHE)
            logger.debug(f"Cached '{cached}' no longer offered for '{question.label}'")

        option = default_choice(question)
        self.cache.put(question, option)
        return Resolution(option, DEFAULT)

    def _resolve_checkbox(self, question, prefill):
        if question.label in prefill:
            checked = str(prefill[question.label]).strip().lower() in _TRUTHY
            return Resolution(checked, PREFILL)
        return Resolution(question.required, DEFAULT)

    def _unresolved(self, question, reason):
        logger.info(f"Unresolved [{question.kind.value}] '{question.label}': {reason}")
        unresolved_collector.record_unresolved_question(
            label=question.label,
            kind=question.kind.value,
            options=list(question.options) or None,
            reason=reason,
            job_url=self.job_url,
        )
        return UNRESOLVED
