"""Daily application quota, keyed by calendar date"""

import logging
from datetime import date

from easy_apply_autopilot import config

logger = logging.getLogger(__name__)

COUNT_KEY = "dailyJobCount"
RESET_KEY = "lastReset"


class QuotaTracker:
    """
    The counter only grows within a date and is reset to zero the first
    time it is read on a new date (calendar comparison, not elapsed time).
    """

    def __init__(self, store, daily_limit=config.DAILY_LIMIT, today=date.today):
        self.store = store
        self.daily_limit = daily_limit
        self._today = today

    def get_daily_count(self):
        today = self._today().isoformat()
        stored = self.store.get([COUNT_KEY, RESET_KEY], defaults={COUNT_KEY: 0})
        if stored.get(RESET_KEY) != today:
            logger.info(f"New day ({today}) - resetting daily application count")
            self.store.set({COUNT_KEY: 0, RESET_KEY: today})
            return 0
        try:
            return max(0, int(stored.get(COUNT_KEY) or 0))
        except (TypeError, ValueError):
            return 0

    def is_quota_exceeded(self):
        return self.get_daily_count() >= self.daily_limit

    def record_application(self, count_so_far=None):
        """Record a submission. The stored count never decreases within a date."""
        current = self.get_daily_count()
        proposed = current + 1 if count_so_far is None else int(count_so_far)
        new_count = max(current, proposed)
        self.store.set({COUNT_KEY: new_count, RESET_KEY: self._today().isoformat()})
        logger.info(f"Applications today: {new_count}/{self.daily_limit}")
        return new_count
