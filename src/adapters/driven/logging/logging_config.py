"""Logging setup for the latency probe."""

import logging
import sys

__all__ = ["configure_logs", "EVENTS_LOGGER", "EVENT_FORMAT", "EVENT_DATE_FORMAT"]

# Error/slow request lines, written to stdout
EVENTS_LOGGER = "src.events"
EVENT_FORMAT = "%(asctime)s | %(message)s"
EVENT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logs() -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level, to stderr.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (src) at DEBUG level.
    - Request events (src.events) on stdout only, one line per event:
      ``YYYY-MM-DD HH:MM:SS | error | ...`` or ``... | slow | ...``.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    formatter = logging.Formatter(log_format, date_format)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Application loggers
    logging.getLogger("src").setLevel(logging.DEBUG)

    # Request events keep their own line format and stay off stderr
    event_handler = logging.StreamHandler(sys.stdout)
    event_handler.setFormatter(logging.Formatter(EVENT_FORMAT, EVENT_DATE_FORMAT))
    events = logging.getLogger(EVENTS_LOGGER)
    events.setLevel(logging.INFO)
    events.addHandler(event_handler)
    events.propagate = False
