"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Cross-platform actions on matched files: open, reveal in the file manager, move to trash.
"""
import os
import sys
import subprocess
from pathlib import Path
import logging
from send2trash import send2trash

logger = logging.getLogger(__name__)


class FileService:
    """
    Cross-platform file operations for post-scan actions.
    Deletion always goes to the system trash, never a permanent erase.
    """

    @staticmethod
    def _existing(file_path: str) -> Path:
        path = Path(file_path).resolve()
        if not path.exists():
            raise RuntimeError(f"File not found: {path}")
        return path

    @staticmethod
    def open_file(file_path: str):
        """Opens a file with the system default application."""
        path = FileService._existing(file_path)

        try:
            if sys.platform == 'win32':
                os.startfile(str(path))
            elif sys.platform == 'darwin':
                subprocess.Popen(['open', str(path)])
            else:
                FileService._run_linux_opener(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to open file: {e}") from e

    @staticmethod
    def reveal_in_explorer(file_path: str):
        """Reveals a file in the system file manager."""
        path = FileService._existing(file_path)

        try:
            if sys.platform == 'win32':
                subprocess.Popen(['explorer', '/select,', str(path)])
            elif sys.platform == 'darwin':
                subprocess.Popen(['open', '-R', str(path)])
            else:
                # Linux file managers have no common "select" flag: open the folder
                FileService._run_linux_opener(str(path.parent))
        except Exception as e:
            raise RuntimeError(f"Failed to reveal file: {e}") from e

    @staticmethod
    def _run_linux_opener(target: str):
        """Linux: Tries gio, falls back to xdg-open."""
        try:
            subprocess.run(['gio', 'open', target], timeout=5)
            return
        except (FileNotFoundError, subprocess.TimeoutExpired):
            pass  # Fallback to xdg-open

        try:
            subprocess.run(['xdg-open', target], timeout=5)
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise RuntimeError("No suitable application found") from e

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = FileService._existing(file_path)

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved to trash: {path}")
