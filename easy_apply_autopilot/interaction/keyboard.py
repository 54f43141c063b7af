"""Keyboard-like input and synthetic event dispatch"""

import logging

logger = logging.getLogger(__name__)

# Event sequence the target page listens for after a value change
INPUT_EVENT_SEQUENCE = ["keydown", "keypress", "input", "keyup"]

_DISPATCH_INPUT_EVENTS_JS = """(el, events) => {
    for (const type of events) {
        el.dispatchEvent(new Event(type, { bubbles: true, cancelable: true }));
    }
    el.dispatchEvent(new Event('change', { bubbles: true }));
}"""

_DISPATCH_CHANGE_JS = """el => {
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
}"""


def fill_input(element, value):
    """Replace an input's value and fire the key/input/change sequence"""
    element.fill(value)
    element.evaluate(_DISPATCH_INPUT_EVENTS_JS, INPUT_EVENT_SEQUENCE)
    return element.input_value() == value


def notify_change(element):
    """Fire input/change so reactive page logic picks up a programmatic change"""
    element.evaluate(_DISPATCH_CHANGE_JS)
