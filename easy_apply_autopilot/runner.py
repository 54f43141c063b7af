"""Outer multi-job loop"""

import logging
from collections import Counter

from easy_apply_autopilot.debug import unresolved_collector
from easy_apply_autopilot.errors import DocumentError
from easy_apply_autopilot.models import StepOutcome
from easy_apply_autopilot.utils.logging import log_result

logger = logging.getLogger(__name__)

SUCCESS = "SUCCESS"
FAILED = "FAILED"
CANCELLED = "CANCELLED"
SKIPPED_ALREADY_APPLIED = "SKIPPED_ALREADY_APPLIED"
QUOTA_REACHED = "QUOTA_REACHED"

STATUS_FOR_OUTCOME = {
    StepOutcome.SUBMITTED: SUCCESS,
    StepOutcome.DISMISSED: CANCELLED,
    StepOutcome.EXHAUSTED: FAILED,
}


def load_job_links(file_path):
    """Load job URLs from file, one per line. Strips comments and deduplicates."""
    with open(file_path, "r", encoding="utf-8") as f:
        urls = []
        seen = set()
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and line not in seen:
                urls.append(line)
                seen.add(line)
        return urls


class JobRunner:
    """
    Applies to each job in turn. Quota is checked before every job and
    after every submission; reaching it stops scheduling but never cuts an
    attempt short. Stop requests are honoured between jobs (and inside the
    navigator between steps).
    """

    def __init__(self, document, navigator, quota, control, pacer, results_path=None):
        self.document = document
        self.navigator = navigator
        self.quota = quota
        self.control = control
        self.pacer = pacer
        self.results_path = results_path
        self.results = []

    def run(self, job_urls):
        for index, job_url in enumerate(job_urls, 1):
            if not self.control.checkpoint():
                logger.info("Stopped - no further jobs scheduled")
                break
            if self.quota.is_quota_exceeded():
                logger.info(f"Daily limit of {self.quota.daily_limit} reached - stopping")
                self._record(job_url, QUOTA_REACHED, "daily limit reached")
                break

            logger.info("=" * 60)
            logger.info(f"JOB {index}/{len(job_urls)}: {job_url}")
            logger.info("=" * 60)
            status = self.apply(job_url)

            if status == SUCCESS and self.quota.is_quota_exceeded():
                logger.info("Daily limit reached after this submission")
                break
            if index < len(job_urls):
                self.pacer.long()

        return self.results

    def apply(self, job_url):
        """One job: navigate, pre-flight, open, traverse. Returns the result status."""
        try:
            self.document.goto(job_url)
        except DocumentError as e:
            return self._record(job_url, FAILED, str(e))
        self.pacer.short()

        already_applied, reason = self.document.is_already_applied()
        if already_applied:
            logger.info(f"Already applied ({reason}) - skipping")
            return self._record(job_url, SKIPPED_ALREADY_APPLIED, reason)

        if not self.document.open_application():
            return self._record(job_url, FAILED, "application form did not open")
        self.pacer.short()

        result = self.navigator.run(job_url=job_url)
        status = STATUS_FOR_OUTCOME[result.outcome]
        if result.outcome is StepOutcome.SUBMITTED:
            self.quota.record_application(self.quota.get_daily_count() + 1)

        unresolved_collector.flush_unresolved_questions()
        steps = self.navigator.attempt.steps_advanced if self.navigator.attempt else 0
        return self._record(job_url, status, result.reason, steps)

    def _record(self, job_url, status, reason="", steps_completed=0):
        log_result(job_url, status, reason, steps_completed, path=self.results_path)
        self.results.append((job_url, status))
        return status

    def summary(self):
        return Counter(status for _, status in self.results)
