"""
Step navigator: the form-traversal automaton

One call to run() is one ApplicationAttempt. Each loop iteration handles
the step currently shown and yields a StepResult:

  ADVANCED   an action control was clicked; handle the next step
  BLOCKED    validation alerts after filling; recover once or give up
  RESTARTED  answers were inferred; reopen the form and traverse again
  SUBMITTED / DISMISSED / EXHAUSTED   terminal

Discovery mode fills placeholders just to enumerate the form's questions.
At the first Review control the accumulated questions go to inference in
one call and the attempt restarts in fill mode. This happens once per
attempt. Nothing raises out of run().
"""

import logging

from easy_apply_autopilot import config
from easy_apply_autopilot.browser.document import Action
from easy_apply_autopilot.interaction.validation import ValidationPass
from easy_apply_autopilot.models import ApplicationAttempt, StepOutcome, StepResult
from easy_apply_autopilot.state.control import ControlState

logger = logging.getLogger(__name__)


class StepNavigator:
    def __init__(
        self,
        document,
        extractor,
        resolver,
        bridge,
        detector,
        pacer,
        control=None,
        max_steps=config.MAX_STEPS,
    ):
        self.document = document
        self.extractor = extractor
        self.resolver = resolver
        self.bridge = bridge
        self.detector = detector
        self.pacer = pacer
        self.control = control or ControlState()
        self.max_steps = max_steps
        self.validation = ValidationPass(document, resolver, pacer)
        self.attempt = None

    # ========================================
    # MAIN LOOP
    # ========================================

    def run(self, prefill=None, job_url=""):
        """Traverse the open application form to a terminal StepResult"""
        self.resolver.job_url = job_url
        attempt = ApplicationAttempt(prefill=dict(prefill or {}))
        self.attempt = attempt
        logger.info(f"Starting application attempt in {attempt.mode.value} mode")

        while True:
            if not self.control.checkpoint():
                logger.info("Stopped - dismissing form")
                self._dismiss()
                return StepResult(StepOutcome.DISMISSED, "stopped")

            if attempt.iterations >= self.max_steps:
                logger.warning(f"⚠️ No terminal state after {self.max_steps} steps - giving up")
                self._dismiss()
                return StepResult(StepOutcome.EXHAUSTED, "step limit reached")
            attempt.iterations += 1

            try:
                result = self.step(attempt)
                if result.outcome is StepOutcome.BLOCKED:
                    result = self._recover(result)
                if result.outcome is StepOutcome.RESTARTED:
                    result = self._reopen()
            except Exception as e:
                logger.error(f"❌ Unexpected error on step {attempt.iterations}: {e}", exc_info=True)
                self._dismiss()
                return StepResult(StepOutcome.EXHAUSTED, f"unexpected error: {e}")

            if result.outcome.is_terminal:
                logger.info(
                    f"Attempt finished: {result.outcome.value}"
                    + (f" ({result.reason})" if result.reason else "")
                )
                return result

            if result.outcome is StepOutcome.ADVANCED and result.action in (Action.NEXT, Action.REVIEW):
                attempt.steps_advanced += 1

    # ========================================
    # ONE STEP
    # ========================================

    def step(self, attempt):
        # 1. Safety reminder interstitial
        if self.document.dismiss_safety_reminder():
            self.pacer.very_short()

        # 2. "Continue applying" restarts the step without advancing
        if self.document.has_action(Action.CONTINUE_APPLYING):
            logger.info("→ Continue applying")
            self.document.click_action(Action.CONTINUE_APPLYING)
            self.pacer.short()
            return StepResult(StepOutcome.ADVANCED, action=Action.CONTINUE_APPLYING)

        # 3. Submit ends the attempt
        if self.document.has_action(Action.SUBMIT):
            return self._submit()

        action = self._primary_action()
        if action is None:
            # 10. Nothing to press
            logger.warning("⚠️ No actionable control found")
            self._dismiss()
            return StepResult(StepOutcome.EXHAUSTED, "no actionable control")

        # 4. Discovery: gather this step's questions before acting
        if attempt.in_discovery:
            attempt.add_questions(self.extractor.extract(discovery=True))

            # 8. First Review in discovery: one inference call, then restart
            if action is Action.REVIEW and not attempt.inference_done:
                transition = self._infer(attempt)
                if transition is not None:
                    return transition

        # 5. Fill mode: apply answers to every field on the step
        if not attempt.in_discovery:
            self.validation.run(attempt.prefill)

        # 6. Validation alerts
        if self.detector.detect_errors():
            return StepResult(StepOutcome.BLOCKED, "validation alert", action=action)

        return self._advance(action)

    def _primary_action(self):
        for action in (Action.NEXT, Action.REVIEW):
            if self.document.has_action(action):
                return action
        return None

    # ========================================
    # TRANSITIONS
    # ========================================

    def _submit(self):
        logger.info("→ Submit application")
        if self.document.uncheck_follow_company():
            self.pacer.very_short()
        self.document.click_action(Action.SUBMIT)
        self.pacer.short()
        if self.document.close_confirmation_modal():
            self.pacer.very_short()
        if self.document.close_application_sent_modal():
            self.pacer.very_short()
        logger.info("✅ Application submitted")
        return StepResult(StepOutcome.SUBMITTED, action=Action.SUBMIT)

    def _advance(self, action):
        # 7. Never click into a step without a progress indicator
        if not self.document.has_progress_indicator():
            logger.warning("⚠️ Progress indicator missing - abandoning attempt")
            self._dismiss()
            return StepResult(StepOutcome.EXHAUSTED, "no progress indicator", action=action)

        # 9. Advance
        logger.info(f"→ {action.value}")
        self.document.click_action(action)
        self.pacer.short()
        if self.document.close_application_sent_modal():
            self.pacer.very_short()
        return StepResult(StepOutcome.ADVANCED, action=action)

    def _recover(self, blocked):
        logger.info("Attempting checkbox error recovery...")
        checkbox_error = self.detector.has_checkbox_error()
        recovered = self.detector.recover_specific_checkbox_error()
        # A dismissed checkbox toast is only cleared once a box was really checked
        if self.detector.detect_errors() or (checkbox_error and not recovered):
            logger.warning("⚠️ Validation errors persist after recovery")
            self._dismiss()
            return StepResult(StepOutcome.EXHAUSTED, "unresolved validation error", action=blocked.action)
        logger.info("✓ Errors cleared")
        return self._advance(blocked.action)

    def _infer(self, attempt):
        """
        Discovery -> inference transition. Returns RESTARTED, or None when
        the attempt switched to fill mode in place (no credentials).
        """
        if not self.bridge.available:
            logger.info("No inference credentials - filling with defaults on this step")
            attempt.enter_fill_mode()
            return None

        questions = attempt.all_questions()
        logger.info(f"Discovery complete: {len(questions)} question(s) collected")
        prefill = self.bridge.infer(questions)
        attempt.enter_fill_mode(prefill)
        if prefill is None:
            logger.info("Inference unavailable - restarting with defaults")
        self._dismiss()
        return StepResult(StepOutcome.RESTARTED, "inference applied")

    def _reopen(self):
        logger.info("Restarting traversal in fill mode")
        self.pacer.short()
        if not self.document.open_application():
            return StepResult(StepOutcome.EXHAUSTED, "could not reopen application")
        self.pacer.short()
        return StepResult(StepOutcome.RESTARTED)

    def _dismiss(self):
        try:
            if self.document.dismiss_form():
                self.pacer.very_short()
        except Exception as e:
            logger.warning(f"⚠️ Could not dismiss form: {e}")
