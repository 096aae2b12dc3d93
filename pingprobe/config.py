"""Environment-driven configuration for the ping time probe."""

import os
from dataclasses import dataclass

TRANSPORTS = ("loopback", "http")


def _positive_int(environ, name: str) -> int | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass
class ProbeConfig:
    """Probe settings.

    Environment Variables:
        PINGPROBE_INTERVAL_MS: Tick interval in milliseconds (default 1000)
        PINGPROBE_TIMEOUT_MS: Acknowledgement timeout (default: one interval)
        PINGPROBE_TRANSPORT: "loopback" or "http" (default: "http" when a URL
                             is set, "loopback" otherwise)
        PINGPROBE_URL: Acknowledgement endpoint for the http transport
    """

    interval_ms: int = 1000
    timeout_ms: int | None = None
    transport: str = "loopback"
    url: str | None = None

    @classmethod
    def from_env(cls, environ=None) -> "ProbeConfig":
        """Build a config from environment variables.

        Raises:
            ValueError: if a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        interval_ms = _positive_int(environ, "PINGPROBE_INTERVAL_MS")
        timeout_ms = _positive_int(environ, "PINGPROBE_TIMEOUT_MS")
        url = environ.get("PINGPROBE_URL", "").strip() or None

        transport = environ.get("PINGPROBE_TRANSPORT", "").strip().lower()
        if not transport:
            transport = "http" if url else "loopback"
        if transport not in TRANSPORTS:
            raise ValueError(f"PINGPROBE_TRANSPORT must be one of {TRANSPORTS}, got {transport!r}")
        if transport == "http" and url is None:
            raise ValueError("PINGPROBE_URL is required for the http transport")

        return cls(
            interval_ms=interval_ms if interval_ms is not None else cls.interval_ms,
            timeout_ms=timeout_ms,
            transport=transport,
            url=url,
        )
