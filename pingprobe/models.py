"""Data models for the ping time probe."""

from dataclasses import dataclass


@dataclass
class ProbeSession:
    """State of one running latency probe.

    ``last_round_trip_ms`` stays ``None`` until a round trip completes, so an
    unset baseline is never rendered as a number.
    """

    enabled: bool = False
    last_sent_at_ms: int | None = None  # tick awaiting its acknowledgement
    last_round_trip_ms: int | None = None
    interval_ms: int = 1000

    @property
    def has_sample(self) -> bool:
        return self.last_round_trip_ms is not None


@dataclass(frozen=True)
class TickId:
    """Payload dispatched for a tick and echoed back with its acknowledgement.

    The sequence number keeps two ticks apart even when a clock adjustment
    gives them the same sent_at_ms.
    """

    sent_at_ms: int
    sequence: int

    def __str__(self) -> str:
        return f"{self.sent_at_ms}.{self.sequence}"


@dataclass
class ProbeTick:
    """One round-trip attempt, timed on the client clock."""

    sent_at_ms: int
    ack_received_at_ms: int | None = None
    sequence: int = 0

    @property
    def tick_id(self) -> TickId:
        return TickId(self.sent_at_ms, self.sequence)

    @property
    def elapsed_ms(self) -> int | None:
        """Round-trip time, or None if unacknowledged or the clock went backwards."""
        if self.ack_received_at_ms is None:
            return None
        elapsed = self.ack_received_at_ms - self.sent_at_ms
        if elapsed < 0:
            return None
        return elapsed
