"""
Debug-only unresolved question collector

Read-only observability into questions the resolver could not answer.
It does NOT change resolution, and nothing reads the buffer back.

Usage:
    1. Enable with --debug-unresolved CLI flag
    2. Call record_unresolved_question() when resolution fails
    3. Call flush_unresolved_questions() when an attempt reaches a terminal outcome

Output:
    debug_unresolved.jsonl - one JSON object per unresolved question
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from easy_apply_autopilot import config

logger = logging.getLogger(__name__)

_enabled = False
_unresolved_buffer: List[Dict] = []


def enable(flag: bool = True):
    global _enabled
    _enabled = flag


def record_unresolved_question(
    *,
    label: str,
    kind: str,
    options: Optional[List[str]],
    reason: str,
    job_url: str = "",
):
    """Buffer one unresolved question. No-op unless enabled."""
    if not _enabled:
        return
    _unresolved_buffer.append(
        {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "job_url": job_url,
            "kind": kind,
            "question_text": label,
            "options": options,
            "reason": reason,
        }
    )


def pending() -> List[Dict]:
    return list(_unresolved_buffer)


def flush_unresolved_questions(path: Optional[str] = None):
    """Append buffered questions to the debug log and clear the buffer"""
    if not _unresolved_buffer:
        return

    try:
        with open(path or config.DEBUG_UNRESOLVED_PATH, "a", encoding="utf-8") as f:
            for record in _unresolved_buffer:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError as e:
        logger.warning(f"Could not write unresolved questions: {e}")

    _unresolved_buffer.clear()
