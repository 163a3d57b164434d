"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) and callback signatures used by the scan engine.

Key Components:
---------------
- StoppedFlag: zero-argument predicate polled at cancellation checkpoints.
- ProgressCallback: receives (processed, total) once per processed name group.
- CompletionCallback: receives the outcome, both buckets and the folder tree.
- FileWalker: Interface for lazy traversal producing file records.
- Classifier: Interface for name grouping and pairwise classification.
"""

from typing import Protocol, Callable, Dict, Iterator, List, Optional, Sequence, Tuple
from namesake.core.models import FileRecord, FolderNode, MatchEntry, ScanOutcome

StoppedFlag = Callable[[], bool]
ProgressCallback = Callable[[int, int], None]
CompletionCallback = Callable[
    [ScanOutcome, Sequence[MatchEntry], Sequence[MatchEntry], Optional[FolderNode]], None
]


# ===== Interfaces =====

class FileWalker(Protocol):
    """
    Interface for traversing a directory tree.

    Methods:
        walk: Lazily yields every readable file below the configured root.
    """
    def walk(self, stopped_flag: Optional[StoppedFlag] = None) -> Iterator[FileRecord]:
        ...


class Classifier(Protocol):
    """Interface for grouping records by name and classifying pairs."""
    def group_by_name(self, records: Sequence[FileRecord]) -> Dict[str, List[FileRecord]]:
        ...

    def classify(
        self,
        records: Sequence[FileRecord],
        stopped_flag: Optional[StoppedFlag] = None
    ) -> Tuple[List[MatchEntry], List[MatchEntry]]:
        ...
