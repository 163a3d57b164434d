"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/session.py
One scan attempt from traversal through completion.

A ScanSession exclusively owns its MatchStore and CancellationController.
run() never raises: every terminal condition comes back as a ScanResult.
"""

import time
from typing import Optional
import logging

from namesake.core.cancellation import CancellationController
from namesake.core.classifier import DuplicateClassifier
from namesake.core.folder_tree import FolderAggregator
from namesake.core.interfaces import ProgressCallback
from namesake.core.match_store import MatchStore
from namesake.core.models import ScanOutcome, ScanParams, ScanResult, ScanState
from namesake.core.progress import ProgressReporter
from namesake.core.walker import DirectoryWalker

logger = logging.getLogger(__name__)


class ScanSession:
    """
    Runs DirectoryWalker -> DuplicateClassifier -> MatchStore on the calling thread,
    then rebuilds the folder tree for completed and stopped scans.

    Usage:
        session = ScanSession(ScanParams("/data"), progress_callback=print)
        result = session.run()          # blocking; run it on a worker thread
        session.controller.request_stop()   # from any other thread
    """

    def __init__(
        self,
        params: ScanParams,
        generation: int = 0,
        progress_callback: Optional[ProgressCallback] = None,
        classifier: Optional[DuplicateClassifier] = None,
        aggregator: Optional[FolderAggregator] = None,
    ):
        self.params = params
        self.generation = generation
        self.store = MatchStore()
        self.controller = CancellationController()
        self.reporter = ProgressReporter(progress_callback)
        self.classifier = classifier or DuplicateClassifier()
        self.aggregator = aggregator or FolderAggregator(follow_symlinks=params.follow_symlinks)
        self.result: Optional[ScanResult] = None

    def request_stop(self) -> None:
        self.controller.request_stop()

    def request_cancel(self) -> None:
        self.controller.request_cancel()

    def run(self) -> ScanResult:
        """Executes the scan. Safe to call once; returns the terminal result."""
        if self.result is not None:
            return self.result

        root_dir = self.params.root_dir
        logger.debug(f"Scan #{self.generation} starting at {root_dir}")
        start_time = time.time()
        self.store.clear()

        try:
            self._scan()
            state = self.controller.resolve()

            if state is ScanState.CANCELED:
                self.store.clear()
                self.result = self._result(ScanOutcome.canceled())
            else:
                folder_tree = self.aggregator.build_tree(root_dir, self.store)
                outcome = ScanOutcome.completed() if state is ScanState.COMPLETED \
                    else ScanOutcome.stopped_partial()
                self.result = self._result(outcome, folder_tree=folder_tree, keep_matches=True)

        except Exception as e:
            logger.exception("Unexpected error during scan")
            # Partially built results are never surfaced after an unexplained fault
            self.store.clear()
            self.result = self._result(ScanOutcome.failed(f"{type(e).__name__}: {e}"))

        elapsed = time.time() - start_time
        logger.debug(f"Scan #{self.generation} finished as {self.result.state.value} in {elapsed:.2f}s")
        return self.result

    def _scan(self) -> None:
        stopped = self.controller.is_requested
        walker = DirectoryWalker(self.params.root_dir, follow_symlinks=self.params.follow_symlinks)

        records = list(walker.walk(stopped_flag=stopped))
        if stopped():
            return

        self.reporter.start(len(records))
        logger.debug(f"Found {len(records)} files in {walker.directories_visited} directories")

        processed = 0
        for name, group in self.classifier.group_by_name(records).items():
            if stopped():
                return

            if len(group) > 1:
                result = self.classifier.classify_group(group, stopped_flag=stopped)
                if result.interrupted:
                    # The in-flight group is dropped whole
                    logger.debug(f"Scan interrupted while comparing '{name}'")
                    return
                self.store.add_exact(result.exact)
                self.store.add_close(result.close)

            processed += len(group)
            self.reporter.report(processed)

    def _result(self, outcome: ScanOutcome, folder_tree=None, keep_matches: bool = False) -> ScanResult:
        exact = tuple(self.store.snapshot_exact()) if keep_matches else ()
        close = tuple(self.store.snapshot_close()) if keep_matches else ()
        return ScanResult(
            outcome=outcome,
            exact=exact,
            close=close,
            folder_tree=folder_tree,
            generation=self.generation,
            processed=self.reporter.processed,
            total=self.reporter.total,
        )
