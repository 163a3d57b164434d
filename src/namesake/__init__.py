"""
Namesake — find duplicate files by name, with a responsive background scan.

Core features:
- Exact matches (same name, size and creation time) and close matches (same name only)
- Stop a scan and keep partial results, or cancel it and discard everything
- Per-folder exact/close counts over the scanned tree
- Safe deletion to system trash (via send2trash)
- CLI interface for headless usage, optional Qt worker with PySide6 (install with [gui] extra)
"""

# Get version
from importlib.metadata import PackageNotFoundError, version as _version

try:
    __version__ = _version("namesake")
except PackageNotFoundError:
    import tomllib
    from pathlib import Path

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API — only what users should import directly
from namesake.core import (
    ScanEngine, ScanSession, ScanParams, ScanOutcome, ScanResult, ScanState,
    FileRecord, MatchEntry, MatchBucket, FolderNode)
from namesake.utils.convert_utils import ConvertUtils
from namesake.services import FileService, MatchService

__all__ = [
    "ScanEngine",
    "ScanSession",
    "ScanParams",
    "ScanOutcome",
    "ScanResult",
    "ScanState",
    "FileRecord",
    "MatchEntry",
    "MatchBucket",
    "FolderNode",
    "ConvertUtils",
    "FileService",
    "MatchService",
    "__version__",
]
