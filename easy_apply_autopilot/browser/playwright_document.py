"""FormDocument over a live Playwright page (LinkedIn Easy Apply markup)"""

import logging

from playwright.sync_api import Error as PlaywrightError

from easy_apply_autopilot.browser.document import (
    Action,
    AlertHandle,
    CheckboxHandle,
    FormDocument,
    RadioGroupHandle,
    SelectHandle,
    TextFieldHandle,
)
from easy_apply_autopilot.errors import DocumentError
from easy_apply_autopilot.interaction.buttons import (
    click_first,
    first_present,
    wait_for_application_modal,
)
from easy_apply_autopilot.interaction.keyboard import fill_input, notify_change
from easy_apply_autopilot.reasoning.normalize import clean_label

logger = logging.getLogger(__name__)

MODAL = '[role="dialog"]'
FORM_ELEMENT = ".fb-dash-form-element"
RADIO_FIELDSET = 'fieldset[data-test-form-builder-radio-button-form-component="true"]'
CHECKBOX_FIELDSET = 'fieldset[data-test-checkbox-form-component="true"]'
PRISTINE_MODAL = ".artdeco-modal--pristine.artdeco-modal--viewport-centered"
PROGRESS_BAR = ".artdeco-completeness-meter-linear__progress-container progress"

ACTION_SELECTORS = {
    Action.CONTINUE_APPLYING: [
        'button.jobs-apply-button.artdeco-button--primary:has(span.artdeco-button__text:text-is("Continue applying"))',
    ],
    Action.NEXT: [
        "button[data-easy-apply-next-button]",
        f'{MODAL} button[aria-label="Continue to next step"]',
    ],
    Action.REVIEW: ['button[aria-label="Review your application"]'],
    Action.SUBMIT: ['button[aria-label="Submit application"]'],
}

APPLY_BUTTON_SELECTORS = [
    "button.jobs-apply-button",
    "button[data-test-autoapply-button]",
    "button[data-test-easy-apply-button]",
    'button[data-control-name="apply"]',
    ".jobs-apply-button",
]

DISMISS_SELECTORS = [
    "button.artdeco-modal__dismiss",
    ".artdeco-modal__dismiss",
    "button[data-test-modal-close-btn]",
    'button[aria-label="Dismiss"]',
]

DISCARD_SELECTORS = [
    'button[data-control-name="discard_application_confirm_btn"]',
    'button[data-test-dialog-secondary-btn]:has-text("Discard")',
    'button.artdeco-button--secondary:has-text("Discard")',
]

FOLLOW_COMPANY_SELECTORS = [
    "#follow-company-checkbox",
    'input[type="checkbox"][id*="follow"]',
    '.jobs-follow-company-checkbox input[type="checkbox"]',
    'input[type="checkbox"][name*="follow"]',
]

ALERT_SELECTOR = (
    ".artdeco-alert, .artdeco-toast, .error-message, .alert, "
    ".artdeco-inline-feedback--error"
)
ALERT_DISMISS_SELECTOR = "button.artdeco-alert__dismiss, button.artdeco-toast__dismiss"

# Stable per-page key for the field group around an element. Alerts and
# checkboxes resolve to the same key when they share a group.
_GROUP_KEY_JS = """el => {
    const group = el.closest('.fb-dash-form-element') || el.closest('fieldset');
    if (!group) return '';
    if (!group.dataset.autopilotGroup) {
        window.__autopilotGroupSeq = (window.__autopilotGroupSeq || 0) + 1;
        group.dataset.autopilotGroup = 'group-' + window.__autopilotGroupSeq;
    }
    return group.dataset.autopilotGroup;
}"""

_IN_CHECKBOX_FIELDSET_JS = (
    "el => !!el.closest('fieldset[data-test-checkbox-form-component=\"true\"]')"
)

# Required marker on the enclosing fieldset rather than on the input itself
_CHECKBOX_GROUP_REQUIRED_JS = """el => {
    const fieldset = el.closest("fieldset");
    if (!fieldset) return false;
    return !!fieldset.querySelector(".fb-dash-form-element__label-title--is-required")
        || fieldset.matches('[data-test-checkbox-form-required="true"]')
        || !!fieldset.querySelector('[data-test-checkbox-form-required="true"]');
}"""


def _text(locator):
    try:
        return clean_label(locator.inner_text())
    except PlaywrightError:
        return ""


def _is_required(element):
    try:
        return (
            element.get_attribute("required") is not None
            or element.get_attribute("aria-required") == "true"
        )
    except PlaywrightError:
        return False


def _is_required_checkbox(element):
    if _is_required(element):
        return True
    try:
        return bool(element.evaluate(_CHECKBOX_GROUP_REQUIRED_JS))
    except PlaywrightError:
        return False


class PlaywrightDocument(FormDocument):
    def __init__(self, page, settle_ms=500):
        self.page = page
        self.settle_ms = settle_ms

    def _settle(self):
        self.page.wait_for_timeout(self.settle_ms)

    # --- interstitials and modals ---

    def dismiss_safety_reminder(self):
        modal = first_present(self.page, [PRISTINE_MODAL])
        if modal is None:
            return False
        logger.info("Safety reminder modal detected")
        return click_first(
            modal,
            ["button.artdeco-button--primary", "button[data-test-modal-close-btn]"],
            "safety reminder confirmation",
        )

    def close_confirmation_modal(self):
        modal = first_present(self.page, [PRISTINE_MODAL])
        if modal is None:
            return False
        logger.info("Confirmation modal detected")
        return click_first(modal, ["button.artdeco-modal__dismiss"], "confirmation close")

    def close_application_sent_modal(self):
        modal = first_present(self.page, [".artdeco-modal:has-text('Application sent')"])
        if modal is None:
            return False
        return click_first(modal, [".artdeco-modal__dismiss"], "application sent close")

    def dismiss_form(self):
        logger.info("Dismissing application form...")
        closed = False
        for selector in DISMISS_SELECTORS:
            if click_first(self.page, [selector], "dismiss"):
                closed = True
                self._settle()
                if self.page.locator(".artdeco-modal").count() == 0:
                    break
                # Closing an unfinished application asks whether to discard it
                if click_first(self.page, DISCARD_SELECTORS, "discard"):
                    self._settle()
                    break
        return closed

    def open_application(self):
        if not click_first(self.page, APPLY_BUTTON_SELECTORS, "apply"):
            logger.warning("⚠️ Apply button not found")
            return False
        return wait_for_application_modal(self.page)

    def is_already_applied(self):
        """Pre-flight: detect a job that was already applied to"""
        try:
            button = self.page.locator(
                'button.jobs-apply-button, button[aria-label*="Easy Apply"]'
            ).first
            if button.count() > 0:
                button_text = button.inner_text().strip()
                if button_text == "Applied":
                    return (True, "button_exact_text: Applied")
                if "View application" in button_text:
                    return (True, "button_text: View application")
        except PlaywrightError:
            pass

        status_indicators = [
            '.artdeco-inline-feedback:has-text("Applied")',
            '[data-test-job-apply-state="APPLIED"]',
            '.job-card-container__footer-item:has-text("Applied")',
        ]
        for indicator in status_indicators:
            try:
                if self.page.locator(indicator).count() > 0:
                    return (True, f"status_badge: {indicator}")
            except PlaywrightError:
                continue
        return (False, "")

    def goto(self, url):
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=30000)
        except PlaywrightError as e:
            raise DocumentError(f"Navigation to {url} failed: {e}") from e

    # --- action controls ---

    def _action_locator(self, action):
        return first_present(self.page, ACTION_SELECTORS[action])

    def has_action(self, action):
        return self._action_locator(action) is not None

    def click_action(self, action):
        locator = self._action_locator(action)
        if locator is None:
            raise DocumentError(f"No {action.value} control on the page")
        try:
            locator.click()
        except PlaywrightError as e:
            raise DocumentError(f"Clicking {action.value} failed: {e}") from e
        return True

    def has_progress_indicator(self):
        try:
            return self.page.locator(PROGRESS_BAR).count() > 0
        except PlaywrightError:
            return False

    def uncheck_follow_company(self):
        checkbox = first_present(self.page, FOLLOW_COMPANY_SELECTORS)
        if checkbox is None:
            logger.debug("Follow company checkbox not found")
            return False
        try:
            if not checkbox.is_checked():
                logger.debug("Follow company checkbox already unchecked")
                return False
            checkbox.set_checked(False, force=True)
            notify_change(checkbox)
            logger.info("Unchecked follow company checkbox")
            return True
        except PlaywrightError as e:
            logger.warning(f"⚠️ Error unchecking follow company: {e}")
            return False

    # --- fields ---

    def text_fields(self):
        fields = []
        containers = self.page.locator(f"{MODAL} {FORM_ELEMENT}")
        try:
            for i in range(containers.count()):
                container = containers.nth(i)
                label = container.locator(".artdeco-text-input--label")
                field_input = container.locator(".artdeco-text-input--input")
                if label.count() == 0 or field_input.count() == 0:
                    continue
                element = field_input.first
                fields.append(
                    TextFieldHandle(
                        label=_text(label.first),
                        value=element.input_value(),
                        required=_is_required(element),
                        ref=element,
                    )
                )
        except PlaywrightError as e:
            logger.warning(f"⚠️ Error reading text fields: {e}")
        return fields

    def radio_groups(self):
        groups = []
        fieldsets = self.page.locator(f"{MODAL} {RADIO_FIELDSET}")
        try:
            for i in range(fieldsets.count()):
                fieldset = fieldsets.nth(i)
                legend = fieldset.locator("legend")
                radios = fieldset.locator('input[type="radio"]')
                if legend.count() == 0 or radios.count() == 0:
                    continue
                options = []
                selected = ""
                for j in range(radios.count()):
                    radio = radios.nth(j)
                    option = self._radio_option_text(fieldset, radio)
                    options.append(option)
                    if radio.is_checked():
                        selected = option
                groups.append(
                    RadioGroupHandle(
                        label=_text(legend.first),
                        options=options,
                        selected=selected,
                        required=_is_required(radios.first),
                        ref=fieldset,
                    )
                )
        except PlaywrightError as e:
            logger.warning(f"⚠️ Error reading radio groups: {e}")
        return groups

    def _radio_option_text(self, fieldset, radio):
        radio_id = radio.get_attribute("id")
        if radio_id:
            label = fieldset.locator(f'label[for="{radio_id}"]')
            if label.count() > 0:
                return _text(label.first)
        return radio.get_attribute("value") or ""

    def select_fields(self):
        selects = []
        containers = self.page.locator(f"{MODAL} {FORM_ELEMENT}")
        try:
            for i in range(containers.count()):
                container = containers.nth(i)
                select = container.locator("select")
                if select.count() == 0:
                    continue
                element = select.first
                label = container.locator("label")
                label_text = _text(label.first) if label.count() > 0 else ""
                options = [
                    clean_label(text)
                    for text in element.locator("option").all_inner_texts()
                ]
                selects.append(
                    SelectHandle(
                        label=label_text or f"Dropdown {i}",
                        options=options,
                        selected_index=element.evaluate("el => el.selectedIndex"),
                        required=_is_required(element),
                        ref=element,
                    )
                )
        except PlaywrightError as e:
            logger.warning(f"⚠️ Error reading dropdowns: {e}")
        return selects

    def checkboxes(self):
        boxes = []
        inputs = self.page.locator(f'{MODAL} input[type="checkbox"]')
        try:
            for i in range(inputs.count()):
                element = inputs.nth(i)
                label_text = ""
                checkbox_id = element.get_attribute("id")
                if checkbox_id:
                    label = self.page.locator(f'label[for="{checkbox_id}"]')
                    if label.count() > 0:
                        label_text = _text(label.first)
                boxes.append(
                    CheckboxHandle(
                        label=label_text or checkbox_id or f"Checkbox {i}",
                        checked=element.is_checked(),
                        required=_is_required_checkbox(element),
                        group=element.evaluate(_GROUP_KEY_JS),
                        in_checkbox_group=element.evaluate(_IN_CHECKBOX_FIELDSET_JS),
                        ref=element,
                    )
                )
        except PlaywrightError as e:
            logger.warning(f"⚠️ Error reading checkboxes: {e}")
        return boxes

    def apply_value(self, handle, value):
        try:
            if isinstance(handle, TextFieldHandle):
                return fill_input(handle.ref, str(value))
            if isinstance(handle, RadioGroupHandle):
                return self._select_radio(handle, value)
            if isinstance(handle, SelectHandle):
                handle.ref.select_option(label=value)
                notify_change(handle.ref)
                return handle.ref.evaluate(
                    "el => el.options[el.selectedIndex]?.textContent.trim()"
                ) == value
            if isinstance(handle, CheckboxHandle):
                handle.ref.set_checked(bool(value), force=True)
                notify_change(handle.ref)
                return handle.ref.is_checked() == bool(value)
        except PlaywrightError as e:
            raise DocumentError(f"Could not set {handle.label!r}: {e}") from e
        raise TypeError(f"Unsupported handle: {type(handle).__name__}")

    def _select_radio(self, handle, option_text):
        fieldset = handle.ref
        radios = fieldset.locator('input[type="radio"]')
        for j in range(radios.count()):
            radio = radios.nth(j)
            if self._radio_option_text(fieldset, radio) != option_text:
                continue
            radio_id = radio.get_attribute("id")
            label = fieldset.locator(f'label[for="{radio_id}"]') if radio_id else None
            if label is not None and label.count() > 0:
                label.first.click()
            else:
                radio.check(force=True)
            notify_change(radio)
            return radio.is_checked()
        return False

    # --- validation feedback ---

    def alerts(self):
        alerts = []
        found = self.page.locator(ALERT_SELECTOR)
        try:
            for i in range(found.count()):
                element = found.nth(i)
                if not element.is_visible():
                    continue
                alerts.append(
                    AlertHandle(
                        text=_text(element),
                        group=element.evaluate(_GROUP_KEY_JS),
                        dismissible=element.locator(ALERT_DISMISS_SELECTOR).count() > 0,
                        ref=element,
                    )
                )
        except PlaywrightError as e:
            logger.warning(f"⚠️ Error reading alerts: {e}")
        return alerts

    def dismiss_alert(self, alert):
        if not alert.dismissible:
            return False
        return click_first(alert.ref, [ALERT_DISMISS_SELECTOR], "alert dismiss")
