"""
Document boundary

The automaton never touches the page directly. It reads fields, alerts and
action controls through a FormDocument, and every value change goes
through apply_value(), whose only job is to make the page's own reactive
logic observe the change.

Handles are snapshots: they carry what was read plus an opaque `ref` the
document implementation uses to act on the element again.
"""

from dataclasses import dataclass, field
from enum import Enum


class Action(str, Enum):
    CONTINUE_APPLYING = "continue_applying"
    NEXT = "next"
    REVIEW = "review"
    SUBMIT = "submit"


@dataclass
class TextFieldHandle:
    label: str
    value: str = ""
    required: bool = False
    ref: object = field(default=None, repr=False, compare=False)


@dataclass
class RadioGroupHandle:
    label: str
    options: list = field(default_factory=list)
    selected: str = ""
    required: bool = False
    ref: object = field(default=None, repr=False, compare=False)


@dataclass
class SelectHandle:
    label: str
    options: list = field(default_factory=list)
    selected_index: int = -1
    required: bool = False
    ref: object = field(default=None, repr=False, compare=False)

    @property
    def selected(self):
        if 0 <= self.selected_index < len(self.options):
            return self.options[self.selected_index]
        return ""


@dataclass
class CheckboxHandle:
    label: str
    checked: bool = False
    required: bool = False
    # Key of the enclosing field group; alerts carry the same key
    group: str = ""
    # True when the group is a checkbox-type form component
    in_checkbox_group: bool = False
    ref: object = field(default=None, repr=False, compare=False)


@dataclass
class AlertHandle:
    text: str
    group: str = ""
    dismissible: bool = False
    ref: object = field(default=None, repr=False, compare=False)


class FormDocument:
    """Everything the automaton may read from or do to the application form"""

    # --- interstitials and modals ---

    def dismiss_safety_reminder(self):
        """Click through a safety/reminder interstitial if one is showing"""
        raise NotImplementedError

    def close_confirmation_modal(self):
        raise NotImplementedError

    def close_application_sent_modal(self):
        raise NotImplementedError

    def dismiss_form(self):
        """Close the application form, discarding it if asked"""
        raise NotImplementedError

    def open_application(self):
        """Open the application form from the job page. Returns True if opened."""
        raise NotImplementedError

    def is_already_applied(self):
        """Returns (bool, reason)"""
        raise NotImplementedError

    def goto(self, url):
        raise NotImplementedError

    # --- action controls ---

    def has_action(self, action):
        raise NotImplementedError

    def click_action(self, action):
        raise NotImplementedError

    def has_progress_indicator(self):
        raise NotImplementedError

    def uncheck_follow_company(self):
        raise NotImplementedError

    # --- fields ---

    def text_fields(self):
        raise NotImplementedError

    def radio_groups(self):
        raise NotImplementedError

    def select_fields(self):
        raise NotImplementedError

    def checkboxes(self):
        raise NotImplementedError

    def apply_value(self, handle, value):
        """
        Set a field's value the way a user would.

        text: str to type; radio/select: option label; checkbox: bool.
        Returns True if the page now shows the value.
        """
        raise NotImplementedError

    # --- validation feedback ---

    def alerts(self):
        raise NotImplementedError

    def dismiss_alert(self, alert):
        raise NotImplementedError
