"""
Results view helpers: group each bucket's matches by file name for display.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List

from namesake.core.models import MatchEntry


@dataclass
class MatchGroup:
    """Matches of one bucket that share a file name, ordered by path."""
    name: str
    entries: List[MatchEntry]

    @property
    def count(self) -> int:
        return len(self.entries)

    def __repr__(self):
        return f"<MatchGroup name={self.name}, count={self.count}>"


def group_matches_by_name(entries: Iterable[MatchEntry]) -> List[MatchGroup]:
    """Groups ordered by name, entries inside a group ordered by path."""
    groups: Dict[str, List[MatchEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.name, []).append(entry)

    return [
        MatchGroup(name=name, entries=sorted(groups[name], key=lambda e: e.path))
        for name in sorted(groups)
    ]
