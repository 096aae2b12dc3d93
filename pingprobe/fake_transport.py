"""Simulated acknowledgement endpoint for offline use and testing."""

import random
import time

from PySide6.QtCore import QThreadPool

from pingprobe.transport import ACK_BODY, ThreadedTransport, TransportError


class FakeEchoServer:
    """Answers round trips with a simulated network delay."""

    def __init__(self, seed: int | None = None, sleep=time.sleep):
        """Initialize with optional random seed for deterministic behavior."""
        # Create isolated random instance for thread safety
        self._random = random.Random(seed)
        self._sleep = sleep

        # Simulation parameters
        self.base_latency = 25.0  # Base latency in ms
        self.latency_variance = 5.0  # Normal variance
        self.spike_probability = 0.05  # 5% chance of latency spike
        self.spike_multiplier = 3.0  # Spike makes latency 3x higher
        self.loss_probability = 0.02  # 2% chance the request is never acknowledged

    def next_delay_ms(self) -> float:
        """Draw the simulated delay of the next round trip."""
        if self._random.random() < self.spike_probability:
            latency = self.base_latency * self.spike_multiplier + self._random.gauss(
                0, self.latency_variance
            )
        else:
            latency = self.base_latency + self._random.gauss(0, self.latency_variance)

        return max(0.1, latency)

    def round_trip(self, payload) -> str:
        """Wait out the simulated delay and return the acknowledgement."""
        if self._random.random() < self.loss_probability:
            raise TransportError(f"simulated loss for payload {payload}")

        self._sleep(self.next_delay_ms() / 1000.0)
        return ACK_BODY


class LoopbackTransport(ThreadedTransport):
    """Transport implemented on top of FakeEchoServer."""

    def __init__(
        self,
        server: FakeEchoServer | None = None,
        thread_pool: QThreadPool | None = None,
        parent=None,
    ):
        super().__init__(thread_pool, parent)
        if server is None:
            server = FakeEchoServer()
        self._server = server

    def round_trip(self, payload) -> str:
        return self._server.round_trip(payload)
