"""Fill-mode validation pass tests"""

from conftest import FakeDocument, FakeStep

from easy_apply_autopilot.browser.document import (
    CheckboxHandle,
    RadioGroupHandle,
    SelectHandle,
    TextFieldHandle,
)
from easy_apply_autopilot.interaction.validation import ValidationPass


def test_fields_are_applied_in_validation_order(resolver, pacer):
    step = FakeStep(
        safety_reminder=True,
        text_fields=[TextFieldHandle("Email", ""), TextFieldHandle("Location (city)", "")],
        checkboxes=[
            CheckboxHandle("I agree to the privacy policy"),
            CheckboxHandle("Follow Acme to stay up to date"),
            CheckboxHandle("Send me marketing emails"),
        ],
        radios=[RadioGroupHandle("Willing to relocate?", ["Yes", "No"])],
        selects=[SelectHandle("Notice period", ["Select an option", "2 weeks", "1 month"], 0)],
    )
    document = FakeDocument([step])
    changed = ValidationPass(document, resolver, pacer).run({"Willing to relocate?": "No"})

    assert not step.safety_reminder
    assert document.applied == [
        ("Email", "john.doe@example.com"),
        ("Location (city)", "New York"),
        ("I agree to the privacy policy", True),
        ("Willing to relocate?", "No"),
        ("Notice period", "2 weeks"),
    ]
    assert changed == 5
    assert not step.checkboxes[1].checked
    assert not step.checkboxes[2].checked


def test_values_already_in_place_are_not_reapplied(resolver, pacer):
    step = FakeStep(
        text_fields=[TextFieldHandle("First name", "John")],
        radios=[RadioGroupHandle("Remote?", ["Yes", "No"], selected="Yes")],
    )
    document = FakeDocument([step])
    assert ValidationPass(document, resolver, pacer).run({}) == 0
    assert document.applied == []


def test_empty_city_field_gets_a_second_fill(resolver, pacer):
    class TypeaheadDropsFirstFill(FakeDocument):
        def apply_value(self, handle, value):
            if handle.label == "City" and not any(label == "City" for label, _ in self.applied):
                self.applied.append((handle.label, value))
                return False
            return super().apply_value(handle, value)

    city = TextFieldHandle("City", "")
    document = TypeaheadDropsFirstFill([FakeStep(text_fields=[city])])
    ValidationPass(document, resolver, pacer).run({})
    assert city.value == "New York"
    assert document.applied == [("City", "New York"), ("City", "New York")]


def test_failure_on_one_field_does_not_stop_the_pass(resolver, pacer):
    class Flaky(FakeDocument):
        def apply_value(self, handle, value):
            if handle.label == "Phone":
                raise RuntimeError("element detached")
            return super().apply_value(handle, value)

    step = FakeStep(text_fields=[TextFieldHandle("Phone", ""), TextFieldHandle("Last name", "")])
    ValidationPass(Flaky([step]), resolver, pacer).run({})
    assert step.text_fields[1].value == "Doe"
