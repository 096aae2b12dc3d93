"""Worker classes for background round trips."""

import logging
from typing import Callable

from PySide6.QtCore import QObject, QRunnable, Signal

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    """Signals for communicating between worker threads and main thread."""

    ack_ready = Signal(object, str)  # Emits (payload, ack body)
    error = Signal(object, str)  # Emits (payload, error message)
    finished = Signal(object)  # Emits the worker when it completes


class RoundTripWorker(QRunnable):
    """Worker that executes one blocking round trip in a background thread."""

    def __init__(self, round_trip: Callable[[object], str], payload):
        super().__init__()
        self.round_trip = round_trip
        self.payload = payload
        self.signals = WorkerSignals()

    def run(self):
        """Execute the round trip in background thread."""
        try:
            logger.debug("Worker starting: payload=%s", self.payload)

            # Blocks for the network latency being measured
            ack = self.round_trip(self.payload)

            self.signals.ack_ready.emit(self.payload, ack)

            logger.debug("Worker completed: payload=%s, ack=%r", self.payload, ack)

        except Exception as e:
            logger.exception("Worker exception: payload=%s, error=%s", self.payload, str(e))
            self.signals.error.emit(self.payload, str(e))

        finally:
            # Always signal completion
            self.signals.finished.emit(self)
