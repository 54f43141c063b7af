"""Text normalization utilities"""

import re
import string

PLACEHOLDER_OPTIONS = ["select an option", "please select", "select one", "choose", "pick", "select"]


def clean_label(text):
    """Collapse whitespace and drop duplicated accessibility text from a label"""
    if not text:
        return ""
    text = " ".join(text.split())
    # Labels often render their text twice (visible + screen-reader span)
    half = len(text) // 2
    if len(text) % 2 == 1 and half and text[half] == " " and text[:half] == text[half + 1:]:
        return text[:half]
    if len(text) % 2 == 0 and half and text[:half] == text[half:]:
        return text[:half]
    return text


def normalize_text(text):
    """Normalize text for keyword matching - lowercase, strip punctuation"""
    if not text:
        return ""
    text = text.lower()
    text = text.translate(str.maketrans('', '', string.punctuation))
    return ' '.join(text.split())


def is_placeholder_option(text):
    """True for the 'Select an option' style entry at the top of a dropdown"""
    normalized = normalize_text(text)
    if not normalized:
        return True
    return normalized in PLACEHOLDER_OPTIONS


_QUESTION_PREFIX = re.compile(r"^\s*question\s*:\s*", re.IGNORECASE)
_OPTIONS_SUFFIX = re.compile(r"\s*\|\|\s*options\s*:.*$", re.IGNORECASE | re.DOTALL)


def normalize_answer_key(key):
    """
    Strip the prompt decorations a model may echo back in its keys:
    'question: Degree || options: BSc, MSc' -> 'Degree'
    """
    key = _QUESTION_PREFIX.sub("", str(key))
    key = _OPTIONS_SUFFIX.sub("", key)
    return key.strip()
