"""Running / paused / stopped control flag shared with the automaton"""

import logging
import threading
from enum import Enum

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class ControlState:
    """
    Cooperative cancellation. The automaton calls checkpoint() before each
    step transition and before each job; pause blocks there, stop makes it
    return False. Nothing is preempted mid-step.
    """

    def __init__(self):
        self._resume = threading.Event()
        self._resume.set()
        self._stopped = threading.Event()

    @property
    def state(self):
        if self._stopped.is_set():
            return RunState.STOPPED
        if not self._resume.is_set():
            return RunState.PAUSED
        return RunState.RUNNING

    @property
    def stopped(self):
        return self._stopped.is_set()

    def pause(self):
        if not self.stopped:
            logger.info("Pause requested")
            self._resume.clear()

    def resume(self):
        logger.info("Resuming")
        self._resume.set()

    def stop(self):
        logger.info("Stop requested")
        self._stopped.set()
        # Wake a paused checkpoint so it can observe the stop
        self._resume.set()

    def checkpoint(self, timeout=None):
        """Block while paused. Returns False once stopped (or if timeout elapses while paused)."""
        if not self._resume.wait(timeout):
            return False
        return not self._stopped.is_set()
