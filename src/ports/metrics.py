"""Latency statistics port definition (interface)."""

from __future__ import annotations

from typing import Protocol

__all__ = ["LatencyStatsPort"]


class LatencyStatsPort(Protocol):
    """Interface for aggregating latency samples.

    Implementations must be async-safe and non-blocking.
    The sample consumer calls update() for each sample drained from the
    requester queue; presentation layers call __str__() to render summaries.
    """

    @property
    def total_seen(self) -> int:
        """Number of samples recorded since creation."""
        ...

    def update(self, elapsed_ns: int, /) -> None:
        """Record one latency sample.

        Args:
            elapsed_ns: Round-trip time of one attempt in nanoseconds.
        """
        ...

    def __str__(self) -> str:
        """Return concise textual summary for humans.

        Returns:
            Formatted statistics string.
        """
        ...
