"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/cancellation.py
Two-mode cooperative cancellation: stop (keep partial results) or cancel (discard).
Both modes raise the same signal; an intent flag tells them apart once the scan unwinds.
"""

import threading
from enum import Enum
import logging

from namesake.core.models import ScanState

logger = logging.getLogger(__name__)


class StopIntent(Enum):
    NONE = "none"
    KEEP_PARTIAL = "keep-partial"
    DISCARD = "discard"


class ControllerState(Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    STOPPED = "stopped"
    CANCELED = "canceled"


class CancellationController:
    """
    One cancellation signal plus the intent behind it.
    Single-use: a fresh controller is created for every scan.
    """

    def __init__(self):
        self._signal = threading.Event()
        self._lock = threading.Lock()
        self._intent = StopIntent.NONE
        self._state = ControllerState.RUNNING

    def request_stop(self) -> None:
        """Stop the scan and keep what has been found so far."""
        self._request(StopIntent.KEEP_PARTIAL)

    def request_cancel(self) -> None:
        """Stop the scan and discard everything."""
        self._request(StopIntent.DISCARD)

    def _request(self, intent: StopIntent) -> None:
        with self._lock:
            if self._state is not ControllerState.RUNNING:
                logger.debug(f"Ignoring {intent.value} request: scan already {self._state.value}")
                return
            # Intent is written before the signal so a checkpoint never sees a bare signal
            self._intent = intent
            self._signal.set()

    def is_requested(self) -> bool:
        """Checkpoint predicate; usable directly as a stopped_flag."""
        return self._signal.is_set()

    __call__ = is_requested

    @property
    def intent(self) -> StopIntent:
        with self._lock:
            return self._intent

    @property
    def state(self) -> ControllerState:
        with self._lock:
            return self._state

    def resolve(self) -> ScanState:
        """
        Called once the scan loop has unwound. Moves to a terminal state and
        returns the matching scan state. Further calls return the same answer.
        """
        with self._lock:
            if self._state is ControllerState.RUNNING:
                if not self._signal.is_set():
                    self._state = ControllerState.COMPLETED
                elif self._intent is StopIntent.KEEP_PARTIAL:
                    self._state = ControllerState.STOPPED
                else:
                    self._state = ControllerState.CANCELED

            return {
                ControllerState.COMPLETED: ScanState.COMPLETED,
                ControllerState.STOPPED: ScanState.STOPPED_PARTIAL,
                ControllerState.CANCELED: ScanState.CANCELED,
            }[self._state]
