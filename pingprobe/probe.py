"""Periodic round-trip latency probe."""

import dataclasses
import logging
import time

from PySide6.QtCore import QObject, Qt, QTimer, Signal

from pingprobe.models import ProbeSession, ProbeTick, TickId
from pingprobe.transport import Transport

logger = logging.getLogger(__name__)

NO_DATA = "no data yet"

# Reasons reported through LatencyProbe.sample_discarded
DISCARD_STALE = "stale"
DISCARD_DISABLED = "disabled"
DISCARD_CLOCK = "clock"
DISCARD_TIMEOUT = "timeout"


def epoch_ms() -> int:
    """Current client wall clock in integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


class LatencyProbe(QObject):
    """Measures the round-trip time of a request/acknowledgement exchange.

    Key features:
    - Two states, Disabled (initial) and Armed, switched by enable/disable/toggle
    - Timer-driven ticks, each dispatching the client timestamp as payload
    - Acknowledgements correlated by value: only the latest tick counts
    - Outstanding round trips abandoned after timeout_ms

    Thread-safe: All state access on Qt main thread via signals/slots.
    """

    # Signals
    display_changed = Signal(str)  # current_display() text
    armed_changed = Signal(bool)
    sample_discarded = Signal(str)  # discard reason

    def __init__(
        self,
        transport: Transport,
        interval_ms: int = 1000,
        timeout_ms: int | None = None,
        clock=epoch_ms,
        parent=None,
    ):
        """Initialize latency probe.

        Args:
            transport: Channel delivering acknowledgements for dispatched payloads
            interval_ms: Tick interval in milliseconds
            timeout_ms: How long a round trip may stay unacknowledged
                        (default: one interval)
            clock: Callable returning epoch milliseconds
            parent: Qt parent object
        """
        super().__init__(parent)

        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if timeout_ms is not None and timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

        self.transport = transport
        self._timeout_ms = timeout_ms
        self._clock = clock

        self._session = ProbeSession(interval_ms=interval_ms)

        # Correlation key of the tick whose acknowledgement is awaited
        self._pending_id: TickId | None = None

        # First dispatch not yet followed by an accepted acknowledgement
        self._awaiting_since_ms = None

        # Counters for get_stats()
        self._ticks_sent = 0
        self._acks_accepted = 0
        self._acks_discarded = 0

        # Timer for periodic ticks
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.on_tick)

        # Timer abandoning unacknowledged round trips
        self._ack_timer = QTimer(self)
        self._ack_timer.setSingleShot(True)
        self._ack_timer.setTimerType(Qt.PreciseTimer)
        self._ack_timer.timeout.connect(self.expire_pending)

        transport.acknowledged.connect(self.on_ack)
        transport.failed.connect(self._on_transport_failed)

    @property
    def session(self) -> ProbeSession:
        """Snapshot of the session state (a copy; mutate through the operations)."""
        return dataclasses.replace(self._session)

    @property
    def is_armed(self) -> bool:
        return self._session.enabled

    @property
    def round_trip_ms(self) -> int | None:
        return self._session.last_round_trip_ms

    @property
    def timeout_ms(self) -> int:
        if self._timeout_ms is None:
            return self._session.interval_ms
        return self._timeout_ms

    def enable(self):
        """Arm the probe and start ticking."""
        if self._session.enabled:
            return

        self._session.enabled = True
        self.timer.start(self._session.interval_ms)
        logger.info(
            "Probe armed: interval=%dms, timeout=%dms", self._session.interval_ms, self.timeout_ms
        )
        self.armed_changed.emit(True)

    def disable(self):
        """Stop ticking and forget the outstanding tick and the last sample.

        In-flight requests are left to complete; their acknowledgements are
        discarded when they arrive.
        """
        if not self._session.enabled:
            return

        self._session.enabled = False
        self.timer.stop()
        self._ack_timer.stop()
        self._awaiting_since_ms = None
        self._pending_id = None
        self._session.last_sent_at_ms = None
        self._session.last_round_trip_ms = None
        logger.info("Probe disabled")
        self.armed_changed.emit(False)
        self.display_changed.emit(self.current_display())

    def toggle(self):
        if self._session.enabled:
            self.disable()
        else:
            self.enable()

    def set_interval(self, interval_ms: int):
        """Update tick interval.

        Args:
            interval_ms: New interval in milliseconds
        """
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")

        self._session.interval_ms = interval_ms
        if self.timer.isActive():
            self.timer.setInterval(interval_ms)
        logger.debug("Interval updated: %dms", interval_ms)

    def on_tick(self):
        """Handle timer tick - dispatch a new timestamped round trip."""
        if not self._session.enabled:
            logger.debug("Tick ignored: probe disabled")
            return

        # Expire first so a round trip is never abandoned right after dispatch
        self.expire_pending()

        self._ticks_sent += 1
        tick = ProbeTick(sent_at_ms=self._clock(), sequence=self._ticks_sent)

        if self._pending_id is not None:
            logger.debug("Tick supersedes unacknowledged tick %s", self._pending_id)
        self._pending_id = tick.tick_id
        self._session.last_sent_at_ms = tick.sent_at_ms

        if self._awaiting_since_ms is None:
            self._awaiting_since_ms = tick.sent_at_ms
            self._ack_timer.start(self.timeout_ms)

        self.transport.dispatch(tick.tick_id)

    def on_ack(self, payload, ack: str = ""):
        """Handle an acknowledgement correlated to the payload that was sent.

        Args:
            payload: The TickId dispatched for the acknowledged tick
            ack: Acknowledgement body (not interpreted)
        """
        # Read the clock before anything else: this is the observation moment
        received_at_ms = self._clock()

        if not self._session.enabled:
            self._discard(DISCARD_DISABLED, payload)
            return

        if self._pending_id is None or payload != self._pending_id:
            self._discard(DISCARD_STALE, payload)
            return

        tick = ProbeTick(
            sent_at_ms=payload.sent_at_ms,
            ack_received_at_ms=received_at_ms,
            sequence=payload.sequence,
        )
        self._pending_id = None
        self._session.last_sent_at_ms = None
        self._awaiting_since_ms = None
        self._ack_timer.stop()

        elapsed = tick.elapsed_ms
        if elapsed is None:
            logger.warning(
                "Clock anomaly: ack received at %d before send at %d",
                received_at_ms,
                tick.sent_at_ms,
            )
            self._session.last_round_trip_ms = None
            self._discard(DISCARD_CLOCK, payload)
        else:
            self._session.last_round_trip_ms = elapsed
            self._acks_accepted += 1
            logger.debug("Round trip completed: %dms", elapsed)

        self.display_changed.emit(self.current_display())

    def expire_pending(self) -> bool:
        """Revert the display once no acknowledgement has arrived for timeout_ms.

        The window opens at the first unacknowledged dispatch. When it closes
        the display goes back to NO_DATA, but the newest tick keeps being
        tracked until it has itself waited timeout_ms; the window then restarts
        at that tick.

        Returns:
            True if the window expired
        """
        if self._awaiting_since_ms is None:
            return False

        now = self._clock()
        waited = now - self._awaiting_since_ms
        if waited < self.timeout_ms:
            if self._session.enabled and not self._ack_timer.isActive():
                self._ack_timer.start(self.timeout_ms - waited)
            return False

        logger.info("No acknowledgement for %dms, reverting display", waited)
        self._session.last_round_trip_ms = None

        tracked_at = self._session.last_sent_at_ms
        if tracked_at is not None and 0 <= now - tracked_at < self.timeout_ms:
            self._awaiting_since_ms = tracked_at
            if self._session.enabled:
                self._ack_timer.start(self.timeout_ms - (now - tracked_at))
            self._discard(DISCARD_TIMEOUT, self._pending_id)
        else:
            abandoned = self._pending_id
            self._pending_id = None
            self._session.last_sent_at_ms = None
            self._awaiting_since_ms = None
            self._ack_timer.stop()
            self._discard(DISCARD_TIMEOUT, abandoned)

        self.display_changed.emit(self.current_display())
        return True

    def current_display(self) -> str:
        """Text for the UI surface: the latest round trip or NO_DATA."""
        if self._session.last_round_trip_ms is None:
            return NO_DATA
        return f"{self._session.last_round_trip_ms} ms"

    def get_stats(self):
        """Get probe statistics.

        Returns:
            Dict with probe state info
        """
        return {
            "armed": self._session.enabled,
            "interval_ms": self._session.interval_ms,
            "timeout_ms": self.timeout_ms,
            "ticks_sent": self._ticks_sent,
            "acks_accepted": self._acks_accepted,
            "acks_discarded": self._acks_discarded,
            "pending": self._session.last_sent_at_ms is not None,
        }

    def _discard(self, reason: str, payload):
        self._acks_discarded += 1
        logger.debug("Discarding result: reason=%s, payload=%s", reason, payload)
        self.sample_discarded.emit(reason)

    def _on_transport_failed(self, payload, error_msg):
        """Handle transport failure; the timeout abandons the tick if it was current."""
        logger.warning("Round trip failed: payload=%s, error=%s", payload, error_msg)
