"""
Unit tests for data models: records, entries, outcomes, parameters and folder nodes.
"""
import os
from types import SimpleNamespace

import pytest

from namesake.core.models import (
    FileRecord, MatchEntry, MatchBucket, FolderNode,
    ScanOutcome, ScanState, ScanParams, ScanResult, creation_time,
)


class TestFileRecord:

    def test_from_path_reads_name_size_and_absolute_path(self, temp_dir):
        path = temp_dir / "report.pdf"
        path.write_bytes(b"x" * 321)

        record = FileRecord.from_path(str(path))

        assert record.name == "report.pdf"
        assert record.path == str(path)
        assert os.path.isabs(record.path)
        assert record.size == 321

    def test_from_path_raises_for_missing_file(self, temp_dir):
        with pytest.raises(OSError):
            FileRecord.from_path(str(temp_dir / "missing.txt"))

    def test_records_are_immutable(self):
        record = FileRecord("a.txt", "/data/a.txt", 1, 0.0)
        with pytest.raises(AttributeError):
            record.size = 2

    def test_creation_time_prefers_birthtime(self):
        stat_result = SimpleNamespace(st_birthtime=5.0, st_ctime=9.0)
        assert creation_time(stat_result) == 5.0

    def test_creation_time_falls_back_to_ctime(self):
        stat_result = SimpleNamespace(st_ctime=9.0)
        assert creation_time(stat_result) == 9.0


class TestMatchEntry:

    def test_exposes_record_fields(self):
        record = FileRecord("a.txt", "/data/a.txt", 1024, 123.5)
        entry = MatchEntry(record, MatchBucket.EXACT)

        assert entry.name == "a.txt"
        assert entry.path == "/data/a.txt"
        assert entry.size == 1024
        assert entry.created_at == 123.5
        assert entry.bucket is MatchBucket.EXACT

    def test_same_record_in_different_buckets_differs(self):
        record = FileRecord("a.txt", "/data/a.txt", 1024, 123.5)
        assert MatchEntry(record, MatchBucket.EXACT) != MatchEntry(record, MatchBucket.CLOSE)


class TestScanOutcome:

    def test_factories(self):
        assert ScanOutcome.completed().state is ScanState.COMPLETED
        assert ScanOutcome.stopped_partial().state is ScanState.STOPPED_PARTIAL
        assert ScanOutcome.canceled().state is ScanState.CANCELED

        failed = ScanOutcome.failed("OSError: boom")
        assert failed.state is ScanState.FAILED
        assert failed.message == "OSError: boom"
        assert "OSError: boom" in str(failed)

    def test_only_completed_and_stopped_keep_results(self):
        assert ScanState.COMPLETED.keeps_results
        assert ScanState.STOPPED_PARTIAL.keeps_results
        assert not ScanState.CANCELED.keeps_results
        assert not ScanState.FAILED.keeps_results

    def test_result_defaults_to_empty_buckets(self):
        result = ScanResult(outcome=ScanOutcome.canceled())
        assert result.exact == ()
        assert result.close == ()
        assert result.folder_tree is None
        assert result.state is ScanState.CANCELED


class TestScanParams:

    def test_empty_root_rejected(self):
        with pytest.raises(ValueError, match="Root directory cannot be empty"):
            ScanParams(root_dir="")
        with pytest.raises(ValueError):
            ScanParams(root_dir="   ")

    def test_root_is_normalized_to_absolute(self):
        params = ScanParams(root_dir="some/relative/../dir")
        assert os.path.isabs(params.root_dir)
        assert params.root_dir == os.path.abspath("some/dir")

    def test_symlinks_not_followed_by_default(self):
        assert ScanParams(root_dir="/tmp").follow_symlinks is False


class TestFolderNode:

    def _tree(self):
        return FolderNode("root", "/r", 3, 1, [
            FolderNode("a", "/r/a", 2, 0, [FolderNode("deep", "/r/a/deep", 1, 0)]),
            FolderNode("b", "/r/b", 1, 1),
        ])

    def test_iter_nodes_is_depth_first_with_depths(self):
        visited = [(depth, node.name) for depth, node in self._tree().iter_nodes()]
        assert visited == [(0, "root"), (1, "a"), (2, "deep"), (1, "b")]

    def test_find_by_path(self):
        tree = self._tree()
        assert tree.find("/r/a/deep").name == "deep"
        assert tree.find("/r/missing") is None

    def test_total_count(self):
        assert self._tree().total_count == 4
