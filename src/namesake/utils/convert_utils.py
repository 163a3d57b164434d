"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import time


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def timestamp_to_human(timestamp: float, fmt: str = "%Y-%m-%d %H:%M") -> str:
        """
        Convert a Unix timestamp to a human-readable string.
        Uses local time by default.
        """
        try:
            return time.strftime(fmt, time.localtime(timestamp))
        except (OverflowError, OSError, ValueError):
            return "Invalid timestamp"

    @staticmethod
    def size_and_date(size_bytes: int, timestamp: float) -> str:
        """One-line description used next to close matches: 'Size: 2 KB | Created: 2024-01-01 10:00'."""
        return f"Size: {size_bytes // 1024} KB | Created: {ConvertUtils.timestamp_to_human(timestamp)}"
