"""HTTP transport for measuring round trips against an acknowledgement endpoint."""

import logging
import threading

import requests
from PySide6.QtCore import QThreadPool

from pingprobe.transport import ThreadedTransport, TransportError

logger = logging.getLogger(__name__)


class HttpTransport(ThreadedTransport):
    """Transport that sends the payload as a query parameter of an HTTP GET.

    The endpoint is expected to answer with a constant acknowledgement and do
    no work of its own. Correlation happens locally: each worker keeps the
    payload it sent, so the response body does not need to echo it.
    """

    def __init__(
        self,
        url: str,
        timeout_ms: int = 1000,
        session: requests.Session | None = None,
        thread_pool: QThreadPool | None = None,
        parent=None,
    ):
        """Initialize HTTP transport.

        Args:
            url: Acknowledgement endpoint URL
            timeout_ms: Maximum time to wait for the response in milliseconds
            session: Optional requests session used by every round trip
                     (default: one session per pool thread)
            thread_pool: Pool running the blocking requests
            parent: Qt parent object
        """
        super().__init__(thread_pool, parent)

        if not url or not url.strip():
            raise ValueError("url cannot be empty")
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

        self.url = url.strip()
        self.timeout_ms = timeout_ms
        self.timeout_seconds = timeout_ms / 1000.0
        self._session = session
        # Pool threads overlap when the server is slower than the interval;
        # requests sessions are not shared between them
        self._local = threading.local()

        logger.debug("HttpTransport initialized: url=%s, timeout_ms=%d", self.url, timeout_ms)

    def _thread_session(self) -> requests.Session:
        """Session for the calling thread; an injected session is used as given."""
        if self._session is not None:
            return self._session

        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            logger.debug("HTTP session created for worker thread")
        return session

    def round_trip(self, payload) -> str:
        try:
            response = self._thread_session().get(
                self.url,
                params={"ts": str(payload)},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise TransportError(f"timed out after {self.timeout_ms}ms") from e
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        logger.debug("Acknowledged: url=%s, status=%d", self.url, response.status_code)
        return response.text
