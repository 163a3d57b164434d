"""
Progress reporting for the scan loop.
Invoked once per fully processed name group, never per file or per pair.
"""
from typing import Optional
import logging

from namesake.core.interfaces import ProgressCallback

logger = logging.getLogger(__name__)


class ProgressReporter:
    """
    Forwards (processed, total) to an optional callback.
    The callback runs on the scan thread; marshaling to a UI thread is up to the callback.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.total = 0
        self.processed = 0
        self.calls = 0

    def start(self, total: int) -> None:
        """Fixes the total: number of files found by the traversal pass."""
        self.total = total
        self.processed = 0

    def report(self, processed: int) -> None:
        """Reports progress; processed never goes backwards."""
        self.processed = max(self.processed, processed)
        self.calls += 1
        if self.callback is None:
            return
        try:
            self.callback(self.processed, self.total)
        except Exception as e:
            # A failing progress display must not abort the scan
            logger.debug(f"Progress callback failed: {type(e).__name__}: {e}")
