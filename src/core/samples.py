"""Delivery of latency samples to the output queue."""

import asyncio
import logging

from src.ports.samples import SampleOverflow

__all__ = ["SampleOverflow", "put_sample"]

logger = logging.getLogger(__name__)


async def put_sample(
    queue: "asyncio.Queue[int]",
    elapsed_ns: int,
    overflow: SampleOverflow = SampleOverflow.BLOCK,
) -> None:
    """Push one latency sample.

    With ``BLOCK`` this waits for free space, stalling the caller until the
    consumer drains the queue. With ``DROP_OLDEST`` it never waits.

    Args:
        queue: Output queue of nanosecond samples.
        elapsed_ns: Measured round-trip time in nanoseconds.
        overflow: Policy applied when the queue is full.
    """
    if overflow is SampleOverflow.BLOCK:
        await queue.put(elapsed_ns)
        return

    if queue.full():
        dropped = queue.get_nowait()
        queue.task_done()
        logger.debug(f"Sample queue full, dropped oldest sample ({dropped} ns)")
    queue.put_nowait(elapsed_ns)
