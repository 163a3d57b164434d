"""
Core scan engine — walker, classifier, match store, cancellation and folder tree.

This package contains the whole engine of namesake:
- DirectoryWalker: breadth-first traversal that skips unreadable directories
- DuplicateClassifier: name grouping and exact/close pair classification
- MatchStore: thread-safe exact/close buckets with path-prefix counts
- CancellationController: stop (keep partial) vs cancel (discard)
- FolderAggregator: folder tree annotated with per-folder match counts
- ScanSession / ScanEngine: one scan attempt, and the background-thread controller

All components are pure Python with no GUI dependencies — suitable for CLI and server usage.
"""

from .walker import DirectoryWalker
from .classifier import DuplicateClassifier, GroupResult
from .match_store import MatchStore
from .cancellation import CancellationController, StopIntent, ControllerState
from .progress import ProgressReporter
from .folder_tree import FolderAggregator
from .session import ScanSession
from .engine import ScanEngine
from .results import MatchGroup, group_matches_by_name
from .models import (
    FileRecord, MatchEntry, MatchBucket, FolderNode,
    ScanState, ScanOutcome, ScanResult, ScanParams)

__all__ = [
    "DirectoryWalker",
    "DuplicateClassifier",
    "GroupResult",
    "MatchStore",
    "CancellationController",
    "StopIntent",
    "ControllerState",
    "ProgressReporter",
    "FolderAggregator",
    "ScanSession",
    "ScanEngine",
    "MatchGroup",
    "group_matches_by_name",
    "FileRecord",
    "MatchEntry",
    "MatchBucket",
    "FolderNode",
    "ScanState",
    "ScanOutcome",
    "ScanResult",
    "ScanParams",
]
