"""Logging utilities"""

import json
import logging
from datetime import datetime, timezone

from easy_apply_autopilot import config

logger = logging.getLogger(__name__)


def configure_logging(verbose=False):
    """Console logging for CLI runs"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def log_result(job_url, status, reason="", steps_completed=0, path=None):
    """Append an application result to the JSONL results log"""
    result = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "job_url": job_url,
        "status": status,
        "steps_completed": steps_completed,
    }
    if reason:
        result["failure_reason"] = reason

    try:
        with open(path or config.RESULTS_LOG_PATH, "a", encoding="utf-8") as f:
            f.write(json.dumps(result) + "\n")
    except OSError as e:
        logger.warning(f"Could not write results log: {e}")

    logger.info(f"[{status}] {job_url}")
    if reason:
        logger.info(f"  Reason: {reason}")
    return result
