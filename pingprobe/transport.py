"""Transport abstraction for round-trip acknowledgements."""

import logging

from PySide6.QtCore import QObject, QThreadPool, Signal

from pingprobe.workers import RoundTripWorker

logger = logging.getLogger(__name__)

# Fixed body returned by the acknowledgement endpoint
ACK_BODY = "pong"


class TransportError(RuntimeError):
    """A round trip that produced no acknowledgement."""


class Transport(QObject):
    """Base class for channels that send an opaque value and report its acknowledgement.

    Results are delivered through signals on the thread that owns the
    transport. Payloads are opaque Python objects (the probe sends a TickId)
    and must come back unchanged, since they are compared by equality.
    """

    acknowledged = Signal(object, str)  # (payload, ack body)
    failed = Signal(object, str)  # (payload, error message)

    def dispatch(self, payload) -> None:
        """Send payload; the outcome arrives later via acknowledged or failed."""
        raise NotImplementedError


class ThreadedTransport(Transport):
    """Transport running a blocking round trip per dispatch on a thread pool."""

    def __init__(self, thread_pool: QThreadPool | None = None, parent=None):
        super().__init__(parent)
        self.thread_pool = thread_pool if thread_pool is not None else QThreadPool.globalInstance()
        self._workers = set()  # Keep in-flight workers alive until finished

    def round_trip(self, payload) -> str:
        """Send payload and block until acknowledged.

        Returns:
            Acknowledgement body

        Raises:
            TransportError: if no acknowledgement was received
        """
        raise NotImplementedError

    def dispatch(self, payload) -> None:
        worker = RoundTripWorker(self.round_trip, payload)
        # Receivers live on this object's thread, so results are queued back to it
        worker.signals.ack_ready.connect(self.acknowledged)
        worker.signals.error.connect(self.failed)
        worker.signals.finished.connect(self._on_worker_finished)

        self._workers.add(worker)
        self.thread_pool.start(worker)

    def in_flight(self) -> int:
        """Number of dispatched round trips that have not finished yet."""
        return len(self._workers)

    def shutdown(self, timeout_ms: int = 1000) -> bool:
        """Wait for in-flight round trips to finish.

        Returns:
            True if the pool drained within timeout_ms
        """
        drained = self.thread_pool.waitForDone(timeout_ms)
        if not drained:
            logger.warning("Transport shutdown timed out with %d round trips in flight", self.in_flight())
        return drained

    def _on_worker_finished(self, worker):
        self._workers.discard(worker)
        logger.debug("Round trip finished (in-flight: %d)", len(self._workers))
