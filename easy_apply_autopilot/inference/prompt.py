"""Prompt serialization and response parsing for the inference backends"""

import json
import logging
import re

from easy_apply_autopilot.errors import InferenceUnavailable
from easy_apply_autopilot.models import QuestionKind
from easy_apply_autopilot.reasoning.normalize import normalize_answer_key

logger = logging.getLogger(__name__)

SECTIONS = {
    QuestionKind.TEXT_INPUT: "inputs",
    QuestionKind.DROPDOWN: "dropdowns",
    QuestionKind.RADIO_GROUP: "radios",
}

_JSON_BLOCK = re.compile(r"```json\s*\n(.*?)\n?```", re.DOTALL)

PROMPT_TEMPLATE = """You are a form-filling assistant that extracts information from a resume to accurately complete form fields.
Instructions:
1. Analyze the provided resume data and context carefully.
2. STRICTLY use fields that exist in the CONTEXT object. Do not add any fields not explicitly listed.
3. Make sure the output has exactly one item per CONTEXT entry in each section.
4. Match resume information to the appropriate form fields.
5. Answer with a single ```json fenced block and nothing else.
Key Rules:
- inputs: use the exact question text as key; the value is the extracted or calculated answer. For work experience use numbers only (e.g. "9").
- dropdowns, radios: use the question text without the "question:" prefix and options as key; the value must be the exact text of one listed option.
- Empty sections: if a CONTEXT list is empty, the matching output section is an empty object.
RESUME: {resume}
CONTEXT: {context}"""


def serialize_questions(questions):
    """Three disjoint groups keyed by section name, each in question order"""
    context = {section: [] for section in SECTIONS.values()}
    for question in questions:
        section = SECTIONS.get(question.kind)
        if section is None:
            continue
        context[section].append(question.describe())
    return context


def build_prompt(questions, resume):
    return PROMPT_TEMPLATE.format(
        resume=json.dumps(resume, ensure_ascii=False),
        context=json.dumps(serialize_questions(questions), ensure_ascii=False),
    )


def parse_answer_block(text):
    """
    Extract the ```json block from a model reply and flatten it into a
    label -> value PrefillMap. Raises InferenceUnavailable when the block is
    missing or malformed.
    """
    if not isinstance(text, str):
        raise InferenceUnavailable("Response has no text")
    match = _JSON_BLOCK.search(text)
    if not match:
        raise InferenceUnavailable("Response has no ```json block")
    try:
        payload = json.loads(match.group(1))
    except ValueError as e:
        raise InferenceUnavailable(f"Response block is not valid JSON: {e}") from e
    if not isinstance(payload, dict) or not any(s in payload for s in SECTIONS.values()):
        raise InferenceUnavailable("Response block has none of inputs/dropdowns/radios")

    prefill = {}
    for section in SECTIONS.values():
        answers = payload.get(section) or {}
        if not isinstance(answers, dict):
            logger.warning(f"⚠️ Ignoring non-object '{section}' section in response")
            continue
        for key, value in answers.items():
            label = normalize_answer_key(key)
            if not label or value is None or isinstance(value, (dict, list)):
                continue
            prefill[label] = str(value)
    return prefill
