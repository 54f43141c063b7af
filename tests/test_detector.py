"""Error detection and checkbox recovery tests"""

from conftest import FakeDocument, FakeStep, checkbox_alert

from easy_apply_autopilot.browser.document import AlertHandle, CheckboxHandle
from easy_apply_autopilot.state.detector import ErrorDetector


def test_no_alerts_means_no_errors(pacer):
    assert ErrorDetector(FakeDocument([FakeStep()]), pacer).detect_errors() is False


def test_dismissible_alert_is_closed_and_reported(pacer):
    step = FakeStep(alerts=[AlertHandle("Something went wrong", dismissible=True)])
    detector = ErrorDetector(FakeDocument([step]), pacer)
    assert detector.detect_errors() is True
    assert step.alerts == []
    assert detector.detect_errors() is False


def test_checkbox_in_same_group_is_checked(pacer):
    consent = CheckboxHandle("I consent", group="g2", in_checkbox_group=True)
    other = CheckboxHandle("Other", group="g1", in_checkbox_group=True)
    step = FakeStep(checkboxes=[other, consent], alerts=[checkbox_alert("g2")])
    detector = ErrorDetector(FakeDocument([step]), pacer)

    assert detector.detect_errors() is True
    assert detector.recover_specific_checkbox_error() is True
    assert consent.checked
    assert not other.checked
    assert detector.detect_errors() is False


def test_falls_back_to_any_checkbox_group(pacer):
    loose = CheckboxHandle("Not in a group", group="g9")
    grouped = CheckboxHandle("Terms", group="g3", in_checkbox_group=True)
    alert = AlertHandle(
        "Select checkbox to proceed",
        ref=lambda step: grouped.checked,
    )
    step = FakeStep(checkboxes=[loose, grouped], alerts=[alert])
    detector = ErrorDetector(FakeDocument([step]), pacer)

    assert detector.recover_specific_checkbox_error() is True
    assert grouped.checked
    assert not loose.checked


def test_unrelated_alert_is_not_a_checkbox_error(pacer):
    step = FakeStep(
        checkboxes=[CheckboxHandle("Terms", group="g1", in_checkbox_group=True)],
        alerts=[AlertHandle("Enter a valid phone number", group="g1")],
    )
    detector = ErrorDetector(FakeDocument([step]), pacer)
    assert detector.recover_specific_checkbox_error() is False
    assert not step.checkboxes[0].checked


def test_recovery_fails_without_an_unchecked_checkbox(pacer):
    step = FakeStep(
        checkboxes=[CheckboxHandle("Terms", checked=True, group="g1")],
        alerts=[AlertHandle("Select checkbox to proceed", group="g1")],
    )
    detector = ErrorDetector(FakeDocument([step]), pacer)
    assert detector.recover_specific_checkbox_error() is False
    assert detector.detect_errors() is True
