"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/walker.py
Breadth-first directory traversal that tolerates filesystem errors.
Features:
- Explicit work queue instead of recursion, so deep trees cannot exhaust the stack
- Unreadable, vanished or locked directories contribute nothing and never abort the walk
- Lazy: records are yielded as each directory is listed, one scandir pass per directory
- Cancellation is checked once per dequeued directory
"""

import os
from collections import deque
from typing import Iterator, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

# Local imports
from namesake.core.models import FileRecord
from namesake.core.interfaces import FileWalker, StoppedFlag


class DirectoryWalker(FileWalker):
    """
    Walks a directory tree breadth-first and yields FileRecord objects.
    A walker is single-use: create a fresh one per scan.

    Attributes:
        root_dir: Root directory to walk
        follow_symlinks: Whether symbolic links to files and directories are followed
    """

    def __init__(self, root_dir: str, follow_symlinks: bool = False):
        self.root_dir = os.path.abspath(root_dir)
        self.follow_symlinks = follow_symlinks
        self.directories_visited = 0
        self._started = False

    def walk(self, stopped_flag: Optional[StoppedFlag] = None) -> Iterator[FileRecord]:
        """
        Yields every file record below root_dir.
        Returns early, without error, as soon as stopped_flag() is observed.
        """
        if self._started:
            raise RuntimeError("DirectoryWalker instances cannot be restarted")
        self._started = True
        return self._walk(stopped_flag)

    def _walk(self, stopped_flag: Optional[StoppedFlag]) -> Iterator[FileRecord]:
        logger.debug(f"Starting walk at {self.root_dir}")
        queue = deque([self.root_dir])
        seen = set()

        while queue:
            if stopped_flag and stopped_flag():
                logger.debug("Walk interrupted by user")
                return

            current_dir = queue.popleft()
            if self.follow_symlinks:
                # Linked directories can form cycles
                real = os.path.realpath(current_dir)
                if real in seen:
                    continue
                seen.add(real)
            self.directories_visited += 1

            files, subdirectories = self._list_directory(current_dir)
            for record in files:
                yield record

            queue.extend(subdirectories)

        logger.debug(f"Walk finished: {self.directories_visited} directories visited")

    def _list_directory(self, directory: str) -> Tuple[List[FileRecord], List[str]]:
        """
        Lists one directory in a single scandir pass.
        Returns its file records and its subdirectory paths.

        Any OSError while opening or reading the directory (permission denied, removed
        mid-scan, locked handle, path too long) makes it contribute nothing.
        A file that cannot be stat'ed drops the files of this directory only;
        its subdirectories are still walked.
        """
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return [], []

        return self._files_of(directory, entries), self._subdirectories_of(directory, entries)

    def _files_of(self, directory: str, entries: List[os.DirEntry]) -> List[FileRecord]:
        try:
            return [
                FileRecord.from_entry(entry, follow_symlinks=self.follow_symlinks)
                for entry in entries
                if self._is_file(entry)
            ]
        except OSError as e:
            logger.debug(f"Skipping files of unreadable directory {directory}: {e}")
            return []

    def _subdirectories_of(self, directory: str, entries: List[os.DirEntry]) -> List[str]:
        try:
            return [
                os.path.abspath(entry.path)
                for entry in entries
                if self._is_directory(entry)
            ]
        except OSError as e:
            logger.debug(f"Skipping subdirectories of unreadable directory {directory}: {e}")
            return []

    def _is_file(self, entry: os.DirEntry) -> bool:
        if not self.follow_symlinks and entry.is_symlink():
            logger.debug(f"Skipping symbolic link: {entry.path}")
            return False
        return entry.is_file(follow_symlinks=self.follow_symlinks)

    def _is_directory(self, entry: os.DirEntry) -> bool:
        if not self.follow_symlinks and entry.is_symlink():
            return False
        return entry.is_dir(follow_symlinks=self.follow_symlinks)
