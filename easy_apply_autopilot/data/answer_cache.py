"""
Per-label answer cache

Persisted through the key-value store so answers converge across steps,
attempts and sessions. Text answers keep a reuse counter; radio and
dropdown answers keep the selected option. Last writer wins.
"""

import logging

from easy_apply_autopilot.models import QuestionKind

logger = logging.getLogger(__name__)

INPUT_FIELDS_KEY = "inputFieldConfigs"
RADIO_BUTTONS_KEY = "radioButtons"
DROPDOWNS_KEY = "dropdowns"

_COLLECTION_FOR_KIND = {
    QuestionKind.TEXT_INPUT: INPUT_FIELDS_KEY,
    QuestionKind.RADIO_GROUP: RADIO_BUTTONS_KEY,
    QuestionKind.DROPDOWN: DROPDOWNS_KEY,
}


def _reuse_count(entry):
    try:
        return max(0, int(entry.get("timesReused") or 0))
    except (TypeError, ValueError):
        return 0


class AnswerCache:
    def __init__(self, store):
        self.store = store

    def _entries(self, collection):
        entries = self.store.get([collection]).get(collection)
        if not isinstance(entries, list):
            return []
        return [entry for entry in entries if isinstance(entry, dict) and "label" in entry]

    def _find(self, entries, label):
        for entry in entries:
            if entry["label"] == label:
                return entry
        return None

    def get(self, question):
        """Cached answer for the question's label, or None. Counts a reuse for text answers."""
        collection = _COLLECTION_FOR_KIND.get(question.kind)
        if collection is None:
            return None
        entries = self._entries(collection)
        entry = self._find(entries, question.label)
        if entry is None:
            return None

        if collection == INPUT_FIELDS_KEY:
            value = entry.get("value")
            if value in (None, ""):
                return None
            entry["timesReused"] = _reuse_count(entry) + 1
            self.store.set({collection: entries})
            return value

        return entry.get("selectedOption") or None

    def put(self, question, value):
        collection = _COLLECTION_FOR_KIND.get(question.kind)
        if collection is None:
            return
        entries = self._entries(collection)
        entry = self._find(entries, question.label)

        if collection == INPUT_FIELDS_KEY:
            if entry is None:
                entries.append({"label": question.label, "value": value, "timesReused": 0})
            else:
                entry["value"] = value
        else:
            if entry is None:
                entries.append({"label": question.label, "selectedOption": value})
            else:
                entry["selectedOption"] = value

        if not self.store.set({collection: entries}):
            logger.warning(f"⚠️ Could not persist cached answer for '{question.label}'")

    def times_reused(self, label):
        entry = self._find(self._entries(INPUT_FIELDS_KEY), label)
        return _reuse_count(entry) if entry else 0
