"""Pytest configuration and shared fixtures for testing"""

import json
from dataclasses import dataclass, field

import pytest

from easy_apply_autopilot.browser.document import (
    Action,
    AlertHandle,
    CheckboxHandle,
    FormDocument,
    RadioGroupHandle,
    SelectHandle,
    TextFieldHandle,
)
from easy_apply_autopilot.data.answer_cache import AnswerCache
from easy_apply_autopilot.data.store import MemoryStore
from easy_apply_autopilot.debug import unresolved_collector
from easy_apply_autopilot.inference.bridge import InferenceBridge
from easy_apply_autopilot.navigator import StepNavigator
from easy_apply_autopilot.perception.extractor import FieldExtractor
from easy_apply_autopilot.reasoning.resolver import AnswerResolver
from easy_apply_autopilot.state.control import ControlState
from easy_apply_autopilot.state.detector import ErrorDetector
from easy_apply_autopilot.utils.timing import Pacer


@dataclass
class FakeStep:
    """One wizard page of a scripted application form"""

    actions: set = field(default_factory=set)
    text_fields: list = field(default_factory=list)
    radios: list = field(default_factory=list)
    selects: list = field(default_factory=list)
    checkboxes: list = field(default_factory=list)
    alerts: list = field(default_factory=list)
    progress: bool = True
    safety_reminder: bool = False
    follow_checked: bool = False


def checkbox_alert(group, text="Select checkbox to proceed"):
    """Inline error that clears once every checkbox in its group is checked"""
    return AlertHandle(
        text=text,
        group=group,
        dismissible=False,
        ref=lambda step: all(box.checked for box in step.checkboxes if box.group == group),
    )


class FakeDocument(FormDocument):
    """
    In-memory FormDocument over a list of FakeSteps. The form opens on the
    first step; Next/Review move forward; Submit closes it behind a
    confirmation. Handles are the step's own objects, so apply_value
    changes what later reads see.
    """

    def __init__(self, steps, already_applied=False, can_open=True):
        self.steps = steps
        self.index = 0
        self.open = True
        self.already_applied = already_applied
        self.can_open = can_open
        self.submitted = False
        self.confirmation_pending = False
        self.dismissed = 0
        self.opened = 0
        self.visited = []
        self.clicks = []
        self.applied = []

    @property
    def step(self):
        return self.steps[self.index]

    # --- interstitials and modals ---

    def dismiss_safety_reminder(self):
        if self.open and self.step.safety_reminder:
            self.step.safety_reminder = False
            return True
        return False

    def close_confirmation_modal(self):
        if self.confirmation_pending:
            self.confirmation_pending = False
            return True
        return False

    def close_application_sent_modal(self):
        return False

    def dismiss_form(self):
        if not self.open:
            return False
        self.open = False
        self.dismissed += 1
        return True

    def open_application(self):
        if not self.can_open:
            return False
        self.open = True
        self.index = 0
        self.opened += 1
        return True

    def is_already_applied(self):
        if self.already_applied:
            return (True, "status_badge")
        return (False, "")

    def goto(self, url):
        self.visited.append(url)
        self.open = False

    # --- action controls ---

    def has_action(self, action):
        return self.open and action in self.step.actions

    def click_action(self, action):
        self.clicks.append(action)
        if action is Action.CONTINUE_APPLYING:
            self.step.actions.discard(action)
        elif action is Action.SUBMIT:
            self.submitted = True
            self.confirmation_pending = True
            self.open = False
        else:
            self.index += 1
        return True

    def has_progress_indicator(self):
        return self.step.progress

    def uncheck_follow_company(self):
        if self.step.follow_checked:
            self.step.follow_checked = False
            return True
        return False

    # --- fields ---

    def text_fields(self):
        return list(self.step.text_fields) if self.open else []

    def radio_groups(self):
        return list(self.step.radios) if self.open else []

    def select_fields(self):
        return list(self.step.selects) if self.open else []

    def checkboxes(self):
        return list(self.step.checkboxes) if self.open else []

    def apply_value(self, handle, value):
        self.applied.append((handle.label, value))
        if isinstance(handle, TextFieldHandle):
            handle.value = value
            return True
        if isinstance(handle, RadioGroupHandle):
            if value not in handle.options:
                return False
            handle.selected = value
            return True
        if isinstance(handle, SelectHandle):
            if value not in handle.options:
                return False
            handle.selected_index = handle.options.index(value)
            return True
        if isinstance(handle, CheckboxHandle):
            handle.checked = bool(value)
            return True
        raise TypeError(type(handle).__name__)

    # --- validation feedback ---

    def alerts(self):
        if not self.open:
            return []
        return [
            alert for alert in self.step.alerts
            if not (callable(alert.ref) and alert.ref(self.step))
        ]

    def dismiss_alert(self, alert):
        if not alert.dismissible:
            return False
        self.step.alerts.remove(alert)
        return True


class FakeBackend:
    """Inference backend returning a canned reply and recording prompts"""

    name = "fake"

    def __init__(self, reply="", available=True):
        self.reply = reply
        self._available = available
        self.prompts = []

    @property
    def available(self):
        return self._available

    def complete(self, prompt):
        self.prompts.append(prompt)
        return self.reply


def json_reply(inputs=None, radios=None, dropdowns=None):
    payload = {"inputs": inputs or {}, "radios": radios or {}, "dropdowns": dropdowns or {}}
    return "Here you go:\n```json\n" + json.dumps(payload) + "\n```"


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def pacer(sleeps):
    """Pacer that records instead of sleeping"""
    return Pacer(sleep=sleeps.append)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def cache(store):
    return AnswerCache(store)


@pytest.fixture
def resolver(cache):
    return AnswerResolver(cache)


@pytest.fixture(autouse=True)
def reset_unresolved_collector():
    unresolved_collector.enable(False)
    unresolved_collector._unresolved_buffer.clear()
    yield
    unresolved_collector.enable(False)
    unresolved_collector._unresolved_buffer.clear()


@pytest.fixture
def make_navigator(pacer, resolver):
    """Build a StepNavigator around a FakeDocument"""

    def _make(document, backend=None, control=None, max_steps=50):
        return StepNavigator(
            document=document,
            extractor=FieldExtractor(document, pacer),
            resolver=resolver,
            bridge=InferenceBridge(backend or FakeBackend(json_reply())),
            detector=ErrorDetector(document, pacer),
            pacer=pacer,
            control=control or ControlState(),
            max_steps=max_steps,
        )

    return _make
