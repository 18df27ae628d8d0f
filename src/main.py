"""Application entrypoint."""

import asyncio
import logging

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.logging.logging_config import configure_logs
from src.adapters.driven.metrics.latency_stats import LatencyStats
from src.adapters.driving.signals import make_stop_on_sigterm
from src.core.errors import RequesterError
from src.core.requester import SLOW_REQUEST_MS, Requester
from src.core.sample_consumer import consume_samples
from src.ports.settings import SettingsPort

__all__ = ["main", "run_until_stopped"]

logger = logging.getLogger(__name__)


async def main() -> None:
    """Start the latency probe.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Start the sample consumer and the requester loop.
    4. Gracefully shutdown on SIGTERM/SIGINT.
    """
    configure_logs()
    logger.info("Starting latency probe...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check PROBE_URL, PROBE_INTERVAL_US, PROBE_TIMEOUT_MS "
            "and that PROBE_RESOLVE (if set) looks like host:port:ip.",
            exc,
        )
        return

    # Wrap config into port so core depends on interface (hexagonal)
    settings_port = SettingsPort(
        interval_us=config.interval_us,
        timeout_ms=config.timeout_ms,
        url=config.url,
        resolve=config.resolve,
        sample_buffer_size=config.sample_buffer_size,
        sample_overflow=config.sample_overflow,
        stats_window_size=config.stats_window_size,
        stats_report_every=config.stats_report_every,
    )

    stats = LatencyStats(
        window_size=settings_port.stats_window_size,
        slow_threshold_ms=SLOW_REQUEST_MS,
    )

    try:
        await run_until_stopped(settings_port, stats, make_stop_on_sigterm())
    except Exception as e:
        logger.error(f"Unhandled exception in requester: {e}", exc_info=True)

    logger.info(f"Latency probe stopped. {stats}")


async def run_until_stopped(
    settings_port: SettingsPort,
    stats: LatencyStats,
    stop_event: asyncio.Event,
) -> None:
    """Run requester and consumer until stop_event is set or the requester fails.

    Args:
        settings_port: Runtime settings.
        stats: Aggregator fed by the consumer.
        stop_event: Set when shutdown is requested.
    """
    samples: asyncio.Queue[int] = asyncio.Queue(maxsize=settings_port.sample_buffer_size)
    requester = Requester(
        interval=settings_port.interval_us,
        timeout=settings_port.timeout_ms,
        url=settings_port.url,
        resolve=settings_port.resolve,
        measure_queue=samples,
        overflow=settings_port.sample_overflow,
    )

    consumer = asyncio.create_task(
        consume_samples(samples, stats, report_every=settings_port.stats_report_every)
    )
    run_task = asyncio.create_task(requester.run())
    stop_task = asyncio.create_task(stop_event.wait())

    try:
        await asyncio.wait({run_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        # run_task was scheduled first, so the loop is running by now
        if not run_task.done():
            await requester.stop()
        await run_task
    except RequesterError as e:
        logger.error(f"Requester aborted: {e}", exc_info=True)
    finally:
        for task in (stop_task, consumer):
            task.cancel()
        await asyncio.gather(stop_task, consumer, return_exceptions=True)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutdown requested by user (Ctrl+C).")
