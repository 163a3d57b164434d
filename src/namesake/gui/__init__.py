"""
Optional Qt integration (install with the [gui] extra).
"""
from .worker import ScanWorker, WorkerSignals

__all__ = ["ScanWorker", "WorkerSignals"]
