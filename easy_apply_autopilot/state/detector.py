"""Validation error detection and targeted recovery"""

import logging
import re

from easy_apply_autopilot.errors import DocumentError

logger = logging.getLogger(__name__)

# Alert text shown when a required checkbox was left unchecked
CHECKBOX_ERROR_PATTERN = re.compile(
    r"select checkbox to proceed|checkbox.*required|check the box", re.IGNORECASE
)


class ErrorDetector:
    def __init__(self, document, pacer=None):
        self.document = document
        self.pacer = pacer
        # Alerts seen by the last detect_errors(), including ones it dismissed
        self.last_alerts = []

    def _pace(self):
        if self.pacer:
            self.pacer.very_short()

    def has_errors(self):
        return bool(self.document.alerts())

    def detect_errors(self):
        """
        Scan for validation alerts/toasts. Dismissible ones are closed.
        Returns True if any alert was present.
        """
        alerts = self.document.alerts()
        self.last_alerts = list(alerts)
        if not alerts:
            return False

        for alert in alerts:
            logger.warning(f"⚠️ Validation alert: {alert.text or '(no text)'}")
            if alert.dismissible:
                try:
                    if self.document.dismiss_alert(alert):
                        self._pace()
                except DocumentError as e:
                    logger.warning(f"⚠️ Could not dismiss alert: {e}")
        return True

    def _checkbox_alerts(self):
        found = []
        for alert in self.last_alerts + self.document.alerts():
            if CHECKBOX_ERROR_PATTERN.search(alert.text or "") and alert not in found:
                found.append(alert)
        return found

    def has_checkbox_error(self):
        """True if the last detect_errors() saw a checkbox-required alert"""
        return any(CHECKBOX_ERROR_PATTERN.search(alert.text or "") for alert in self.last_alerts)

    def recover_specific_checkbox_error(self):
        """
        For each "checkbox required" alert, check the unchecked checkbox in
        the alert's field group, or failing that any unchecked checkbox in a
        checkbox-type group. Returns True if the step no longer shows alerts.
        """
        checkbox_alerts = self._checkbox_alerts()
        if not checkbox_alerts:
            return False

        changed = False
        for alert in checkbox_alerts:
            target = self._checkbox_for(alert)
            if target is None:
                logger.warning(f"⚠️ No unchecked checkbox found for alert: {alert.text}")
                continue
            try:
                if self.document.apply_value(target, True):
                    logger.info(f"✓ Checked '{target.label}' to clear checkbox error")
                    changed = True
                self._pace()
            except DocumentError as e:
                logger.warning(f"⚠️ Could not check '{target.label}': {e}")

        if not changed:
            return False
        return not self.has_errors()

    def _checkbox_for(self, alert):
        unchecked = [box for box in self.document.checkboxes() if not box.checked]
        if alert.group:
            for box in unchecked:
                if box.group == alert.group:
                    return box
        for box in unchecked:
            if box.in_checkbox_group:
                return box
        return None
