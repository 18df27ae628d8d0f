"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal

__all__ = ["make_stop_on_sigterm"]

logger = logging.getLogger(__name__)


def make_stop_on_sigterm() -> asyncio.Event:
    """Create SIGTERM/SIGINT-based stop event for the probe.

    Registers handlers that set an asyncio.Event; the entrypoint waits on it
    and then performs the requester's stop handshake.

    On Docker/Kubernetes, SIGTERM is sent 30s before SIGKILL,
    allowing the in-flight request to finish.

    Returns:
        Event set once a termination signal has been received.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal() -> None:
        """Signal handler that sets the stop event on SIGTERM/SIGINT."""
        logger.info("Termination signal received, initiating graceful shutdown...")
        stop.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal)

    return stop
