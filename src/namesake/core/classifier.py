"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/classifier.py
Groups file records by name and classifies every same-named pair as exact or close.

Pairing is quadratic in group size. That is a deliberate simplicity-over-asymptotics
choice: same-named files cluster in small groups, so a union-find structure would add
complexity for no practical gain.

Creation timestamps are compared verbatim, with no tolerance window. Two real copies
whose metadata differs by a fraction of a second are classified as close, not exact.
"""

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple
from collections import defaultdict
import logging

from namesake.core.interfaces import Classifier, StoppedFlag
from namesake.core.models import FileRecord, MatchBucket, MatchEntry

logger = logging.getLogger(__name__)


class GroupResult(NamedTuple):
    """Buckets produced from one name group."""
    exact: List[MatchEntry]
    close: List[MatchEntry]
    interrupted: bool = False


class DuplicateClassifier(Classifier):
    """
    Name-based duplicate classifier.
    A pair is exact iff size and creation time are equal, otherwise close.
    """

    def group_by_name(self, records: Sequence[FileRecord]) -> Dict[str, List[FileRecord]]:
        """
        Groups records by file name, in first-seen order.
        Names are compared as-is: case sensitivity follows the filesystem that produced them.
        """
        groups = defaultdict(list)
        for record in records:
            groups[record.name].append(record)
        return dict(groups)

    @staticmethod
    def is_exact_pair(a: FileRecord, b: FileRecord) -> bool:
        return a.size == b.size and a.created_at == b.created_at

    def classify_group(
        self,
        group: Sequence[FileRecord],
        stopped_flag: Optional[StoppedFlag] = None
    ) -> GroupResult:
        """
        Examines all k*(k-1)/2 pairs of one name group.
        Both members of a pair go into that pair's bucket, at most once per path.
        stopped_flag is polled before every pair; when raised, the result is marked interrupted.
        """
        exact: Dict[str, MatchEntry] = {}
        close: Dict[str, MatchEntry] = {}

        for i in range(len(group)):
            for j in range(i + 1, len(group)):
                if stopped_flag and stopped_flag():
                    return GroupResult(list(exact.values()), list(close.values()), interrupted=True)

                a, b = group[i], group[j]
                if self.is_exact_pair(a, b):
                    bucket, target = MatchBucket.EXACT, exact
                else:
                    bucket, target = MatchBucket.CLOSE, close

                for record in (a, b):
                    if record.path not in target:
                        target[record.path] = MatchEntry(record, bucket)

        return GroupResult(list(exact.values()), list(close.values()))

    def classify(
        self,
        records: Sequence[FileRecord],
        stopped_flag: Optional[StoppedFlag] = None
    ) -> Tuple[List[MatchEntry], List[MatchEntry]]:
        """
        Full classification pass over a set of records.
        Groups of one file contribute nothing. Returns (exact, close).
        """
        exact: List[MatchEntry] = []
        close: List[MatchEntry] = []

        for name, group in self.group_by_name(records).items():
            if len(group) < 2:
                continue
            result = self.classify_group(group, stopped_flag)
            if result.interrupted:
                logger.debug(f"Classification interrupted in group '{name}'")
                break
            exact.extend(result.exact)
            close.extend(result.close)

        return exact, close
