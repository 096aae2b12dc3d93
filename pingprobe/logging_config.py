"""Logging configuration for the pingprobe application."""

import logging
import os
import sys

# Third-party loggers that would log every HTTP round trip at DEBUG
QUIET_LOGGERS = ("urllib3.connectionpool",)


def configure_logging() -> None:
    """Configure application-wide logging.

    Respects PINGPROBE_LOG_LEVEL environment variable (default: INFO).
    Logs to stderr with timestamp, level, module name, and message.

    Environment Variables:
        PINGPROBE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                             Default is INFO.

    Examples:
        # Default INFO level
        $ python -m pingprobe

        # Every tick, acknowledgement and discard (urllib3 stays at WARNING)
        $ PINGPROBE_LOG_LEVEL=DEBUG python -m pingprobe
    """
    log_level_str = os.environ.get("PINGPROBE_LOG_LEVEL", "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    log_level = log_level_map.get(log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )

    # Keep DEBUG output to ticks, acknowledgements and discards
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logger = logging.getLogger(__name__)
    logger.info("Logging configured: level=%s", logging.getLevelName(log_level))
