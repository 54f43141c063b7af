"""
Persistent key-value storage

Holds the answer cache, the daily counter and configuration overrides.
Reads and writes never raise: a missing, unreadable or corrupt file reads
as empty, and a failed write is logged and dropped.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Storage boundary: get(keys) -> values, set(mapping) -> ack"""

    def get(self, keys, defaults=None):
        """Return {key: value} for the requested keys; missing keys use defaults"""
        raise NotImplementedError

    def set(self, mapping):
        """Write every key in mapping. Returns True on success."""
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Dict-backed store (no persistence)"""

    def __init__(self, initial=None):
        self._data = dict(initial or {})

    def get(self, keys, defaults=None):
        defaults = defaults or {}
        if isinstance(keys, str):
            keys = [keys]
        return {key: self._data.get(key, defaults.get(key)) for key in keys}

    def set(self, mapping):
        self._data.update(mapping)
        return True

    def snapshot(self):
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """Store backed by one JSON object file, rewritten atomically on every set"""

    def __init__(self, path):
        self.path = Path(path)

    def _load(self):
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Could not read store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"⚠️ Store {self.path} is not a JSON object - ignoring it")
            return {}
        return data

    def get(self, keys, defaults=None):
        defaults = defaults or {}
        if isinstance(keys, str):
            keys = [keys]
        data = self._load()
        return {key: data.get(key, defaults.get(key)) for key in keys}

    def set(self, mapping):
        data = self._load()
        data.update(mapping)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Could not write store {self.path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False
