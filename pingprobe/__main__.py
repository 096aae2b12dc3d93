"""Entry point for the pingprobe application."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from pingprobe.config import ProbeConfig
from pingprobe.fake_transport import LoopbackTransport
from pingprobe.logging_config import configure_logging
from pingprobe.probe import LatencyProbe
from pingprobe.ui.main_window import MainWindow

# Configure logging early
configure_logging()
logger = logging.getLogger(__name__)


def build_transport(config: ProbeConfig):
    """Create the configured transport, falling back to loopback.

    Returns:
        (transport, user_message) where user_message is None unless a
        fallback occurred
    """
    if config.transport == "http":
        from pingprobe.transport_http import HttpTransport

        try:
            transport = HttpTransport(config.url, timeout_ms=config.timeout_ms or config.interval_ms)
            logger.info("HttpTransport initialized: url=%s", config.url)
            return transport, None
        except ValueError as e:
            logger.error("HttpTransport configuration invalid: %s", e)
            return LoopbackTransport(), "Using simulated server (configuration error)"

    logger.info("Using LoopbackTransport")
    return LoopbackTransport(), "Using simulated server"


def main():
    """Main entry point for the pingprobe application."""
    app = QApplication(sys.argv)

    user_message = None
    try:
        config = ProbeConfig.from_env()
    except ValueError as e:
        logger.error("Configuration invalid, using defaults: %s", e)
        config = ProbeConfig()
        user_message = "Using defaults (configuration error)"

    transport, transport_message = build_transport(config)
    user_message = user_message or transport_message

    probe = LatencyProbe(transport, interval_ms=config.interval_ms, timeout_ms=config.timeout_ms)

    window = MainWindow(probe)
    if user_message:
        window.status_label.setText(f"Status: {user_message}")
        window.status_label.setStyleSheet("font-weight: bold; color: orange;")

    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
