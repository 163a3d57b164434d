"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/folder_tree.py
Rebuilds the scanned directory tree and annotates every folder with the number of
exact and close matches found beneath it.
Runs only after a scan has stopped writing to the match store.
"""

import os
from typing import List, Tuple
import logging

from namesake.core.match_store import MatchStore
from namesake.core.models import FolderNode, MatchBucket

logger = logging.getLogger(__name__)


class FolderAggregator:
    """
    Mirrors the directory structure below a root as FolderNode objects.
    Uses an explicit stack so adversarially deep trees cannot exhaust the call stack.
    Folders that cannot be listed keep their node but lose their children.
    """

    def __init__(self, follow_symlinks: bool = False):
        self.follow_symlinks = follow_symlinks

    def build_tree(self, root_path: str, store: MatchStore) -> FolderNode:
        root_path = os.path.abspath(root_path)
        root = self._make_node(root_path, store)

        stack = [root]
        seen = {os.path.realpath(root_path)}
        while stack:
            parent = stack.pop()
            for name, path in self._list_subdirectories(parent.path):
                if self.follow_symlinks:
                    real = os.path.realpath(path)
                    if real in seen:
                        continue
                    seen.add(real)
                child = self._make_node(path, store, name=name)
                parent.children.append(child)
                stack.append(child)

        logger.debug(f"Folder tree built for {root_path}")
        return root

    @staticmethod
    def _dir_prefix(path: str) -> str:
        """Directory path with a trailing separator, so 'photos' does not match 'photos-old'."""
        return path if path.endswith(os.sep) else path + os.sep

    def _make_node(self, path: str, store: MatchStore, name: str = None) -> FolderNode:
        prefix = self._dir_prefix(path)
        return FolderNode(
            name=name or os.path.basename(path.rstrip(os.sep)) or path,
            path=path,
            exact_count=store.count_by_path_prefix(prefix, MatchBucket.EXACT),
            close_count=store.count_by_path_prefix(prefix, MatchBucket.CLOSE),
        )

    def _list_subdirectories(self, directory: str) -> List[Tuple[str, str]]:
        """(name, path) of each subdirectory, ordered by name; empty on any OSError."""
        try:
            with os.scandir(directory) as entries:
                subdirs = [
                    (entry.name, os.path.abspath(entry.path))
                    for entry in entries
                    if (self.follow_symlinks or not entry.is_symlink())
                    and entry.is_dir(follow_symlinks=self.follow_symlinks)
                ]
        except OSError as e:
            logger.debug(f"Omitting children of unreadable directory {directory}: {e}")
            return []
        return sorted(subdirs, key=lambda item: (item[0].casefold(), item[0]))
