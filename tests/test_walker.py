"""
Unit tests for DirectoryWalker.
Verifies breadth-first discovery, tolerance of unreadable directories and cancellation.
"""
import inspect
import os

import pytest

from conftest import make_file
from namesake.core.models import FileRecord
from namesake.core.walker import DirectoryWalker


def _depth(path, root):
    return os.path.relpath(path, root).count(os.sep)


class TestDirectoryWalker:

    def test_finds_all_files_recursively(self, name_tree, temp_dir):
        records = list(DirectoryWalker(str(temp_dir)).walk())

        assert sorted(r.path for r in records) == sorted(str(p) for p in name_tree.values())
        by_path = {r.path: r for r in records}
        assert by_path[str(name_tree["b2"])].size == 2048
        assert by_path[str(name_tree["b2"])].name == "b.txt"

    def test_walks_breadth_first(self, name_tree, temp_dir):
        records = list(DirectoryWalker(str(temp_dir)).walk())
        depths = [_depth(r.path, temp_dir) for r in records]

        # Every shallower level is exhausted before a deeper one starts
        assert depths == sorted(depths)

    def test_walk_is_lazy(self, name_tree, temp_dir):
        walk = DirectoryWalker(str(temp_dir)).walk()
        assert inspect.isgenerator(walk)
        assert next(walk).path.startswith(str(temp_dir))

    def test_walker_cannot_be_restarted(self, temp_dir):
        walker = DirectoryWalker(str(temp_dir))
        list(walker.walk())
        with pytest.raises(RuntimeError):
            walker.walk()

    def test_unreadable_directory_is_skipped(self, name_tree, temp_dir, blocked_dirs):
        blocked_dirs.add(str(temp_dir / "backup"))

        paths = {r.path for r in DirectoryWalker(str(temp_dir)).walk()}

        # backup/ contributes neither its own files nor its subdirectories
        assert str(name_tree["b2"]) not in paths
        assert str(name_tree["a2"]) not in paths
        assert str(name_tree["a1"]) in paths
        assert str(name_tree["b1"]) in paths

    def test_unreadable_root_yields_nothing(self, name_tree, temp_dir, blocked_dirs):
        blocked_dirs.add(str(temp_dir))
        assert list(DirectoryWalker(str(temp_dir)).walk()) == []

    def test_missing_root_yields_nothing(self, temp_dir):
        assert list(DirectoryWalker(str(temp_dir / "nope")).walk()) == []

    def test_directory_vanishing_mid_walk_is_tolerated(self, temp_dir):
        make_file(temp_dir / "keep.txt", 10)
        make_file(temp_dir / "gone" / "lost.txt", 10)

        walk = DirectoryWalker(str(temp_dir)).walk()
        first = next(walk)
        assert first.name == "keep.txt"

        # Remove gone/ before the walker gets to it
        (temp_dir / "gone" / "lost.txt").unlink()
        (temp_dir / "gone").rmdir()
        assert list(walk) == []

    def test_each_directory_is_listed_once(self, name_tree, temp_dir, monkeypatch):
        listed = []
        real_scandir = os.scandir

        def scandir(path="."):
            listed.append(os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", scandir)
        walker = DirectoryWalker(str(temp_dir))
        list(walker.walk())

        # root, photos, photos-old, backup, backup/2024
        assert walker.directories_visited == 5
        assert len(set(listed)) == len(listed)
        assert len(listed) == 5

    def test_unstatable_file_drops_only_its_directory_files(self, name_tree, temp_dir, monkeypatch):
        real_from_entry = FileRecord.from_entry

        def from_entry(entry, follow_symlinks=False):
            if entry.name == "unique.txt":
                raise PermissionError(f"Access denied: {entry.path}")
            return real_from_entry(entry, follow_symlinks=follow_symlinks)

        monkeypatch.setattr(FileRecord, "from_entry", from_entry)

        paths = {r.path for r in DirectoryWalker(str(temp_dir)).walk()}

        # The root loses b.txt along with unique.txt, subdirectories are still walked
        assert str(name_tree["b1"]) not in paths
        assert str(name_tree["unique"]) not in paths
        assert paths == {str(name_tree[k]) for k in ("a1", "a2", "b2", "c")}

    def test_stopped_before_start_yields_nothing(self, name_tree, temp_dir):
        assert list(DirectoryWalker(str(temp_dir)).walk(stopped_flag=lambda: True)) == []

    def test_stop_is_checked_per_directory(self, name_tree, temp_dir):
        checks = []

        def stop_after_root():
            checks.append(1)
            return len(checks) > 1

        walker = DirectoryWalker(str(temp_dir))
        records = list(walker.walk(stopped_flag=stop_after_root))

        # Only the root directory was listed
        assert walker.directories_visited == 1
        assert sorted(r.name for r in records) == ["b.txt", "unique.txt"]

    def test_skips_symlinks(self, temp_dir):
        real = make_file(temp_dir / "real.txt", 10)
        try:
            (temp_dir / "link.txt").symlink_to(real)
            (temp_dir / "linked_dir").symlink_to(temp_dir, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported on this platform")

        names = [r.name for r in DirectoryWalker(str(temp_dir)).walk()]
        assert names == ["real.txt"]

    def test_follow_symlinks_does_not_loop(self, temp_dir):
        make_file(temp_dir / "sub" / "f.txt", 10)
        try:
            (temp_dir / "sub" / "back").symlink_to(temp_dir, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("Symlinks not supported on this platform")

        records = list(DirectoryWalker(str(temp_dir), follow_symlinks=True).walk())
        assert [r.name for r in records] == ["f.txt"]
