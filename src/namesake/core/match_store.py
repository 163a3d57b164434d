"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/match_store.py
Thread-safe accumulation of exact and close matches for one scan session.
"""

import threading
from typing import Dict, Iterable, List, Tuple
import logging

from namesake.core.models import MatchBucket, MatchEntry

logger = logging.getLogger(__name__)


class MatchStore:
    """
    Holds the exact and close buckets of one scan session.
    Each bucket is keyed by path, so a path appears at most once per bucket
    (it may still appear in both buckets).
    Every operation runs under a single lock owned by this instance.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._buckets: Dict[MatchBucket, Dict[str, MatchEntry]] = {
            MatchBucket.EXACT: {},
            MatchBucket.CLOSE: {},
        }

    def add(self, bucket: MatchBucket, entries: Iterable[MatchEntry]) -> None:
        entries = list(entries)
        with self._lock:
            target = self._buckets[bucket]
            for entry in entries:
                target.setdefault(entry.path, entry)

    def add_exact(self, entries: Iterable[MatchEntry]) -> None:
        self.add(MatchBucket.EXACT, entries)

    def add_close(self, entries: Iterable[MatchEntry]) -> None:
        self.add(MatchBucket.CLOSE, entries)

    def clear(self) -> None:
        with self._lock:
            for target in self._buckets.values():
                target.clear()

    def snapshot(self, bucket: MatchBucket) -> List[MatchEntry]:
        """Copy of one bucket in insertion order."""
        with self._lock:
            return list(self._buckets[bucket].values())

    def snapshot_exact(self) -> List[MatchEntry]:
        return self.snapshot(MatchBucket.EXACT)

    def snapshot_close(self) -> List[MatchEntry]:
        return self.snapshot(MatchBucket.CLOSE)

    def count_by_path_prefix(self, prefix: str, bucket: MatchBucket) -> int:
        """
        Number of entries in bucket whose path starts with prefix.
        Comparison is case-insensitive. The lock is held for the whole read.
        """
        folded = prefix.casefold()
        with self._lock:
            return sum(
                1 for path in self._buckets[bucket]
                if path.casefold().startswith(folded)
            )

    def remove_path(self, path: str) -> bool:
        """
        Removes path from both buckets in one critical section.
        Returns True if it was present in at least one of them.
        """
        with self._lock:
            removed = False
            for target in self._buckets.values():
                if target.pop(path, None) is not None:
                    removed = True
        if removed:
            logger.debug(f"Removed match: {path}")
        return removed

    def counts(self) -> Tuple[int, int]:
        """Returns (exact, close) bucket sizes."""
        with self._lock:
            return len(self._buckets[MatchBucket.EXACT]), len(self._buckets[MatchBucket.CLOSE])

    def __repr__(self):
        exact, close = self.counts()
        return f"<MatchStore exact={exact}, close={close}>"
