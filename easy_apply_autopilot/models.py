"""Records shared by the perception, reasoning and navigation layers"""

from dataclasses import dataclass, field
from enum import Enum

from easy_apply_autopilot import config


class QuestionKind(str, Enum):
    TEXT_INPUT = "text_input"
    RADIO_GROUP = "radio_group"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class Question:
    """
    One form field needing an answer.

    Identity is (label, kind). current_value is a snapshot taken at
    extraction time and does not take part in equality.
    """

    label: str
    kind: QuestionKind
    options: tuple = ()
    required: bool = False
    current_value: str = field(default="", compare=False)

    @property
    def key(self):
        return (self.label, self.kind)

    @property
    def surfaced_options(self):
        """Options as sent to inference: dropdowns are cut to the first few plus a marker"""
        options = list(self.options)
        if (
            self.kind is QuestionKind.DROPDOWN
            and len(options) > config.DROPDOWN_SURFACED_OPTIONS
        ):
            return options[: config.DROPDOWN_SURFACED_OPTIONS] + [
                config.TRUNCATION_MARKER
            ]
        return options

    def describe(self):
        """Single-line form used in the inference prompt"""
        if not self.options:
            return self.label
        return f"question: {self.label} || options: {', '.join(self.surfaced_options)}"


class StepOutcome(str, Enum):
    SUBMITTED = "submitted"
    ADVANCED = "advanced"
    BLOCKED = "blocked"
    DISMISSED = "dismissed"
    EXHAUSTED = "exhausted"
    # Non-terminal: traverse again from the first step
    RESTARTED = "restarted"

    @property
    def is_terminal(self):
        return self in (
            StepOutcome.SUBMITTED,
            StepOutcome.DISMISSED,
            StepOutcome.EXHAUSTED,
        )


@dataclass
class StepResult:
    outcome: StepOutcome
    reason: str = ""
    # Action control chosen for the step; kept so a recovered BLOCKED step can still advance
    action: object = None


class AttemptMode(str, Enum):
    DISCOVERY = "discovery"
    FILL = "fill"


@dataclass
class ApplicationAttempt:
    """State of one traversal, discarded on a terminal outcome"""

    prefill: dict = field(default_factory=dict)
    mode: AttemptMode = AttemptMode.DISCOVERY
    inference_done: bool = False
    steps_advanced: int = 0
    iterations: int = 0
    questions: dict = field(
        default_factory=lambda: {kind: [] for kind in QuestionKind}
    )

    def __post_init__(self):
        # Caller-supplied answers: nothing to discover
        if self.prefill:
            self.mode = AttemptMode.FILL
            self.inference_done = True

    @property
    def in_discovery(self):
        return self.mode is AttemptMode.DISCOVERY

    def add_questions(self, questions):
        """Accumulate questions in order, once per (label, kind)"""
        for question in questions:
            bucket = self.questions[question.kind]
            if all(existing.key != question.key for existing in bucket):
                bucket.append(question)

    def all_questions(self):
        ordered = []
        for kind in QuestionKind:
            ordered.extend(self.questions[kind])
        return ordered

    def enter_fill_mode(self, prefill=None):
        self.prefill = dict(prefill or {})
        self.mode = AttemptMode.FILL
        self.inference_done = True
