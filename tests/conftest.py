"""
Shared fixtures for scan engine tests.
Creates isolated temporary directories with controlled file trees.
"""
import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict

import pytest

# Add src/ to sys.path so 'namesake' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from namesake.core import models  # noqa: E402

JAN_1_2024 = datetime(2024, 1, 1, 12, 0, 0).timestamp()
JUN_1_2024 = datetime(2024, 6, 1, 12, 0, 0).timestamp()


def make_file(path: Path, size: int, timestamp: float = JAN_1_2024) -> Path:
    """Writes size bytes to path and pins its timestamps."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    os.utime(path, (timestamp, timestamp))
    return path


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.abspath(tmpdir))


@pytest.fixture
def pinned_creation_time(monkeypatch):
    """
    Creation time cannot be set on most filesystems, so tests read it from the
    modification time, which os.utime() can pin.
    """
    monkeypatch.setattr(models, "creation_time", lambda stat_result: stat_result.st_mtime)


@pytest.fixture
def blocked_dirs(monkeypatch):
    """
    Directories added to the returned set raise PermissionError when listed.
    Works even when tests run as root, where chmod 000 would not deny access.
    """
    blocked = set()
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.path.abspath(os.fspath(path)) in blocked:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    return blocked


@pytest.fixture
def name_tree(temp_dir, pinned_creation_time) -> Dict[str, Path]:
    """
    Controlled tree for classification scenarios:
    - a.txt twice, same size and timestamp, in different subfolders (exact pair)
    - b.txt at 512 and 2048 bytes (close pair)
    - unique.txt once (no match)
    - photos-old/c.txt once, sibling of photos/ sharing its name prefix
    """
    files = {}
    files["a1"] = make_file(temp_dir / "photos" / "a.txt", 1024)
    files["a2"] = make_file(temp_dir / "backup" / "2024" / "a.txt", 1024)
    files["b1"] = make_file(temp_dir / "b.txt", 512)
    files["b2"] = make_file(temp_dir / "backup" / "b.txt", 2048)
    files["unique"] = make_file(temp_dir / "unique.txt", 100)
    files["c"] = make_file(temp_dir / "photos-old" / "c.txt", 10)
    return files
