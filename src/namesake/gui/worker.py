"""
Qt worker runnable — follows modern Qt pattern: QRunnable + QThreadPool.
Runs one ScanSession and turns its callbacks into Qt signals, so a window can
receive progress and results on the GUI thread via queued connections.
"""
from PySide6.QtCore import QRunnable, QObject, Signal
from namesake.core.models import ScanParams
from namesake.core.session import ScanSession


class WorkerSignals(QObject):
    """Separate QObject to hold signals (QRunnable cannot emit signals directly)."""
    progress = Signal(int, int, int)   # generation, processed, total
    finished = Signal(int, object)     # generation, ScanResult


class ScanWorker(QRunnable):
    """
    Worker runnable that performs one scan in the thread pool.
    Signals carry the scan generation so the receiver can ignore stale workers.
    Automatically deleted after execution (setAutoDelete=True).
    """
    def __init__(self, params: ScanParams, generation: int = 0):
        super().__init__()
        self.generation = generation
        self.signals = WorkerSignals()
        self.session = ScanSession(params, generation=generation, progress_callback=self.safe_progress_emit)
        self.setAutoDelete(True)

    def stop(self):
        """Stop and keep partial results."""
        self.session.request_stop()

    def cancel(self):
        """Stop and discard results."""
        self.session.request_cancel()

    def safe_progress_emit(self, processed: int, total: int):
        """Emits progress unless the scan has already been asked to end."""
        if self.session.controller.is_requested():
            return
        try:
            self.signals.progress.emit(self.generation, processed, total)
        except RuntimeError:
            # Receiver's C++ object is already gone
            pass

    def run(self):
        """Main execution method. Runs in thread pool thread."""
        result = self.session.run()
        try:
            self.signals.finished.emit(self.generation, result)
        except RuntimeError:
            pass
