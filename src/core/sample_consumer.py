"""Consumer draining the requester's latency queue."""

import asyncio
import logging

from src.ports.metrics import LatencyStatsPort

__all__ = ["consume_samples"]

logger = logging.getLogger(__name__)


async def consume_samples(
    samples: "asyncio.Queue[int]",
    stats: LatencyStatsPort,
    report_every: int = 10,
) -> None:
    """Drain latency samples forever.

    Keeps the requester's queue empty so a blocking sample send never stalls
    the request loop. Runs until cancelled.

    Args:
        samples: Queue filled by the requester (nanoseconds).
        stats: Aggregator receiving every sample.
        report_every: Log the summary every N samples (0 disables it).
    """
    while True:
        elapsed_ns = await samples.get()
        try:
            stats.update(elapsed_ns)
        finally:
            samples.task_done()

        if report_every and stats.total_seen % report_every == 0:
            logger.info(f"Latency: {stats}")
