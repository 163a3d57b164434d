"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for name-based duplicate scanning.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Iterator
import os
from enum import Enum


# =============================
# Enums
# =============================

class MatchBucket(Enum):
    """
    Classification bucket for a pair of same-named files.
    """
    EXACT = "exact"
    CLOSE = "close"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            MatchBucket.EXACT: "Exact Matches",
            MatchBucket.CLOSE: "Close Matches",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            MatchBucket.EXACT: "Same name, size and creation time",
            MatchBucket.CLOSE: "Same name, different size or creation time",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ScanState(Enum):
    """Terminal state of a scan attempt."""
    COMPLETED = "completed"
    STOPPED_PARTIAL = "stopped-partial"
    CANCELED = "canceled"
    FAILED = "failed"

    @property
    def display_name(self) -> str:
        mapping = {
            ScanState.COMPLETED: "Scan Completed",
            ScanState.STOPPED_PARTIAL: "Scan stopped. Showing partial results.",
            ScanState.CANCELED: "Scan canceled.",
            ScanState.FAILED: "Scan Failed",
        }
        return mapping.get(self, self.value)

    @property
    def keeps_results(self) -> bool:
        """True if matches and the folder tree survive this state."""
        return self in (ScanState.COMPLETED, ScanState.STOPPED_PARTIAL)


# ======================
#  Core Data Models
# ======================

def creation_time(stat_result: os.stat_result) -> float:
    """
    Creation timestamp as reported by the filesystem.
    Uses st_birthtime where the platform provides it (macOS, BSD, Windows on
    Python 3.12+), otherwise st_ctime.
    """
    birth = getattr(stat_result, "st_birthtime", None)
    if birth is not None:
        return birth
    return stat_result.st_ctime


@dataclass(frozen=True)
class FileRecord:
    """
    A single file discovered during traversal.
    Immutable once built from a filesystem entry.
    """
    name: str
    path: str
    size: int  # in bytes
    created_at: float

    @classmethod
    def from_entry(cls, entry: os.DirEntry, follow_symlinks: bool = False) -> "FileRecord":
        """Build a record from an os.scandir() entry. Raises OSError if stat fails."""
        stat_result = entry.stat(follow_symlinks=follow_symlinks)
        return cls(
            name=entry.name,
            path=os.path.abspath(entry.path),
            size=stat_result.st_size,
            created_at=creation_time(stat_result),
        )

    @classmethod
    def from_path(cls, path: str) -> "FileRecord":
        """Build a record from a path. Raises OSError if stat fails."""
        stat_result = os.stat(path)
        abs_path = os.path.abspath(path)
        return cls(
            name=os.path.basename(abs_path),
            path=abs_path,
            size=stat_result.st_size,
            created_at=creation_time(stat_result),
        )

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class MatchEntry:
    """
    A file record tagged with the bucket it was classified into.
    Identified by path within its bucket.
    """
    record: FileRecord
    bucket: MatchBucket

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def path(self) -> str:
        return self.record.path

    @property
    def size(self) -> int:
        return self.record.size

    @property
    def created_at(self) -> float:
        return self.record.created_at

    def __repr__(self):
        return f"<MatchEntry {self.bucket.value} path={self.path}>"


@dataclass
class FolderNode:
    """
    One directory of the scanned tree, annotated with duplicate counts.
    Counts are derived from the match store when the tree is built.
    """
    name: str
    path: str
    exact_count: int = 0
    close_count: int = 0
    children: List["FolderNode"] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return self.exact_count + self.close_count

    def iter_nodes(self) -> Iterator[Tuple[int, "FolderNode"]]:
        """Yields (depth, node) pairs depth-first, parents before children."""
        stack = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            for child in reversed(node.children):
                stack.append((depth + 1, child))

    def find(self, path: str) -> Optional["FolderNode"]:
        """Returns the node with the given path, or None."""
        target = os.path.normpath(path)
        for _, node in self.iter_nodes():
            if os.path.normpath(node.path) == target:
                return node
        return None

    def __repr__(self):
        return (f"<FolderNode path={self.path}, exact={self.exact_count}, "
                f"close={self.close_count}, children={len(self.children)}>")


@dataclass(frozen=True)
class ScanOutcome:
    """Terminal state of a scan; message is set only for FAILED."""
    state: ScanState
    message: Optional[str] = None

    @classmethod
    def completed(cls) -> "ScanOutcome":
        return cls(ScanState.COMPLETED)

    @classmethod
    def stopped_partial(cls) -> "ScanOutcome":
        return cls(ScanState.STOPPED_PARTIAL)

    @classmethod
    def canceled(cls) -> "ScanOutcome":
        return cls(ScanState.CANCELED)

    @classmethod
    def failed(cls, message: str) -> "ScanOutcome":
        return cls(ScanState.FAILED, message)

    def __str__(self):
        if self.message:
            return f"{self.state.display_name}: {self.message}"
        return self.state.display_name


@dataclass(frozen=True)
class ScanResult:
    """Everything handed to the completion callback of one scan."""
    outcome: ScanOutcome
    exact: Tuple[MatchEntry, ...] = ()
    close: Tuple[MatchEntry, ...] = ()
    folder_tree: Optional[FolderNode] = None
    generation: int = 0
    processed: int = 0
    total: int = 0

    @property
    def state(self) -> ScanState:
        return self.outcome.state


"""
DTO for scan parameters with built-in validation.
Interface-agnostic — used by both GUI and CLI.
"""

@dataclass
class ScanParams:
    """Parameters for a scan operation with validation."""
    root_dir: str
    follow_symlinks: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir or not str(self.root_dir).strip():
            raise ValueError("Root directory cannot be empty")
        self.root_dir = os.path.abspath(os.path.expanduser(str(self.root_dir).strip()))
