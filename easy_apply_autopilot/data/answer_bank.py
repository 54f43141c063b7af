"""Static answer bank - default applicant facts and label heuristics"""

from collections import namedtuple

# Default applicant fields, used when neither prefill nor cache has an answer
DEFAULT_FIELDS = {
    "YearsOfExperience": "5",
    "City": "New York",
    "FirstName": "John",
    "LastName": "Doe",
    "Email": "john.doe@example.com",
    "PhoneNumber": "555-123-4567",
}

# Fallback for text labels no rule matches
FALLBACK_FIELD = "YearsOfExperience"

# Field used to fill empty text inputs while discovering a form
DISCOVERY_FIELD = "YearsOfExperience"

Rule = namedtuple("Rule", ["keywords", "field"])

# ========================================
# LABEL RULES
# ========================================
# Evaluated top to bottom; the first rule with a keyword contained in the
# lowercased label wins. Order matters: "Email" must not reach the name
# rules, and "Last name" must not be taken for a location.
LABEL_RULES = [
    Rule(("phone", "mobile"), "PhoneNumber"),
    Rule(("email",), "Email"),
    Rule(("first", "given"), "FirstName"),
    Rule(("last", "family"), "LastName"),
    Rule(("city", "location"), "City"),
]

# Checkbox labels that indicate a consent the form will not proceed without
MANDATORY_CHECKBOX_KEYWORDS = ["*", "required", "mandatory", "agree", "consent", "acknowledge"]

# Opt-ins that are never checked automatically
OPT_IN_CHECKBOX_KEYWORDS = ["follow", "marketing", "newsletter", "promotional", "updates"]


def default_field_for_label(label):
    """Name of the default field the label maps to, following LABEL_RULES order"""
    lowered = (label or "").lower()
    for rule in LABEL_RULES:
        if any(keyword in lowered for keyword in rule.keywords):
            return rule.field
    return FALLBACK_FIELD


def default_value_for_label(label, fields=None):
    fields = fields or DEFAULT_FIELDS
    return fields[default_field_for_label(label)]
