"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/engine.py
Scan controller consumed by front ends (CLI, GUI).
This is the SINGLE entry point for running scans — no Qt/PySide6 dependencies.

Each start_scan() runs a fresh ScanSession on its own background thread. Sessions are
numbered by generation; progress and completion coming from any session other than the
current one are dropped, so a straggling scan can never leak into a newer one. The
generation check and the callback run under one delivery lock, which start_scan also
takes to bump the generation.
"""

import threading
from typing import Optional, Union
import logging

from namesake.core.folder_tree import FolderAggregator
from namesake.core.interfaces import CompletionCallback, ProgressCallback
from namesake.core.models import FolderNode, ScanParams, ScanResult
from namesake.core.session import ScanSession

logger = logging.getLogger(__name__)


class ScanEngine:
    """
    Usage:
        engine = ScanEngine(on_progress=show_progress, on_complete=show_results)
        engine.start_scan("/home/user/Documents")
        ...
        engine.request_stop()     # keep partial results
        engine.request_cancel()   # discard everything

    Callbacks run on the scan thread. Front ends marshal them to their own thread.
    While a callback runs, start_scan() from another thread waits for it to return.
    """

    def __init__(
        self,
        on_progress: Optional[ProgressCallback] = None,
        on_complete: Optional[CompletionCallback] = None,
    ):
        self.on_progress = on_progress
        self.on_complete = on_complete
        self._lock = threading.Lock()
        # Held across generation check + callback; reentrant so callbacks may start a scan
        self._delivery_lock = threading.RLock()
        self._generation = 0
        self._session: Optional[ScanSession] = None
        self._thread: Optional[threading.Thread] = None
        self.last_result: Optional[ScanResult] = None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def session(self) -> Optional[ScanSession]:
        with self._lock:
            return self._session

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start_scan(self, root: Union[str, ScanParams]) -> int:
        """
        Cancels any scan still in flight and starts a new one.
        Returns the new scan's generation number.
        Raises ValueError for an empty root.
        """
        params = root if isinstance(root, ScanParams) else ScanParams(root_dir=root)

        with self._delivery_lock, self._lock:
            if self._session is not None:
                self._session.request_cancel()
            self._generation += 1
            generation = self._generation
            session = ScanSession(
                params,
                generation=generation,
                progress_callback=lambda processed, total: self._forward_progress(generation, processed, total),
            )
            thread = threading.Thread(
                target=self._run_session,
                args=(session,),
                name=f"namesake-scan-{generation}",
                daemon=True,
            )
            self._session = session
            self._thread = thread
            self.last_result = None

        logger.info(f"Scan #{generation} started: {params.root_dir}")
        thread.start()
        return generation

    def request_stop(self) -> None:
        """Stops the current scan; matches found so far are kept."""
        session = self.session
        if session is not None:
            session.request_stop()

    def request_cancel(self) -> None:
        """Cancels the current scan; all matches are discarded."""
        session = self.session
        if session is not None:
            session.request_cancel()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Blocks until the current scan thread ends. Returns False on timeout."""
        with self._lock:
            thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def remove_match(self, path: str) -> bool:
        """
        Removes a path from both buckets of the current scan's store,
        e.g. after the file was deleted by the user.
        """
        session = self.session
        if session is None:
            return False
        return session.store.remove_path(path)

    def rebuild_folder_tree(self) -> Optional[FolderNode]:
        """
        Rebuilds the folder tree of the last finished scan from its current store contents.
        Returns None while a scan is running or when the last scan kept no results.
        """
        with self._lock:
            session = self._session
            result = self.last_result
        if session is None or result is None or not result.state.keeps_results:
            return None
        aggregator = FolderAggregator(follow_symlinks=session.params.follow_symlinks)
        return aggregator.build_tree(session.params.root_dir, session.store)

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _forward_progress(self, generation: int, processed: int, total: int) -> None:
        with self._delivery_lock:
            if not self._is_current(generation):
                logger.debug(f"Dropping progress from stale scan #{generation}")
                return
            if self.on_progress:
                self.on_progress(processed, total)

    def _run_session(self, session: ScanSession) -> None:
        """Thread body. Nothing raised here may escape the thread."""
        result = session.run()
        logger.info(f"Scan #{session.generation}: {result.outcome}")

        with self._delivery_lock:
            with self._lock:
                if session.generation != self._generation:
                    logger.debug(f"Dropping completion from stale scan #{session.generation}")
                    return
                self.last_result = result

            if not self.on_complete:
                return
            try:
                self.on_complete(result.outcome, result.exact, result.close, result.folder_tree)
            except Exception:
                logger.exception("Completion callback failed")
