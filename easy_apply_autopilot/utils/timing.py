"""Timing utilities"""

import logging
import random
import time

from easy_apply_autopilot import config

logger = logging.getLogger(__name__)


def human_delay(min_ms=300, max_ms=800, sleep=time.sleep):
    """Random human-like delay"""
    delay = random.uniform(min_ms, max_ms) / 1000
    sleep(delay)


class Pacer:
    """
    Named delay tiers used to throttle every interaction.

    The target page updates asynchronously after a click or a value change,
    so the automaton always paces before its next read.
    """

    def __init__(self, delays_ms=None, jitter=0.0, sleep=time.sleep):
        self.delays_ms = dict(config.DEFAULT_DELAYS_MS)
        if delays_ms:
            self.delays_ms.update(delays_ms)
        self.jitter = jitter
        self._sleep = sleep

    def duration_ms(self, tier=config.LONG):
        if tier not in self.delays_ms:
            raise ValueError(f"Unknown pacing tier: {tier}")
        return self.delays_ms[tier]

    def delay(self, tier=config.LONG):
        ms = self.duration_ms(tier)
        human_delay(ms, ms * (1 + self.jitter), sleep=self._sleep)

    def very_short(self):
        self.delay(config.VERY_SHORT)

    def short(self):
        self.delay(config.SHORT)

    def medium(self):
        self.delay(config.MEDIUM)

    def long(self):
        self.delay(config.LONG)

    def very_long(self):
        self.delay(config.VERY_LONG)
