"""Inference bridge: one batched call per discovery pass, never raises"""

import logging

from easy_apply_autopilot.data.answer_bank import DEFAULT_FIELDS
from easy_apply_autopilot.errors import InferenceUnavailable
from easy_apply_autopilot.inference.prompt import build_prompt, parse_answer_block

logger = logging.getLogger(__name__)


class InferenceBridge:
    def __init__(self, backend, resume=None):
        self.backend = backend
        self.resume = resume or DEFAULT_FIELDS
        self.calls = 0

    @property
    def available(self):
        """False when the selected backend has no credentials"""
        return self.backend is not None and self.backend.available

    def infer(self, questions):
        """
        Map accumulated questions to a PrefillMap.
        Returns None ("unavailable") on any failure; callers fall back to defaults.
        """
        if not self.available:
            logger.info("Inference backend has no credentials - using defaults")
            return None

        self.calls += 1
        logger.info(
            f"Requesting answers for {len(questions)} question(s) via {self.backend.name}"
        )
        try:
            reply = self.backend.complete(build_prompt(questions, self.resume))
            prefill = parse_answer_block(reply)
        except InferenceUnavailable as e:
            logger.warning(f"⚠️ Inference unavailable: {e}")
            return None

        logger.info(f"✓ Inference returned {len(prefill)} answer(s)")
        return prefill
