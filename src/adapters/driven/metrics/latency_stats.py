"""In-memory sliding-window latency statistics."""

from __future__ import annotations

import statistics
from collections import deque

from src.ports.metrics import LatencyStatsPort

__all__ = ["LatencyStats"]

NS_PER_MS = 1_000_000


class LatencyStats(LatencyStatsPort):
    """Fast, lock-free latency summary for async context.

    Tracks:
    - Average, min and max latency over the window.
    - Share of slow samples (above the slow threshold).
    - Total samples seen.

    Not thread-safe; create one instance per event loop.
    """

    def __init__(self, *, window_size: int = 100, slow_threshold_ms: int = 500) -> None:
        """Initialize statistics collector.

        Args:
            window_size: Number of recent samples to keep for statistics.
            slow_threshold_ms: Samples above this count as slow.
        """
        self._window: deque[int] = deque(maxlen=window_size)
        self._slow_threshold_ms = slow_threshold_ms
        self._total_seen: int = 0

    @property
    def total_seen(self) -> int:
        return self._total_seen

    def update(self, elapsed_ns: int) -> None:
        """Record one latency sample.

        Args:
            elapsed_ns: Round-trip time in nanoseconds.
        """
        self._window.append(elapsed_ns)
        self._total_seen += 1

    def __str__(self) -> str:
        """Return human-readable one-line summary for logging.

        Returns:
            Formatted statistics string.
        """
        if not self._window:
            return "Latency: waiting for data …"

        n_window = len(self._window)
        window_ms = [ns / NS_PER_MS for ns in self._window]
        slow = sum(1 for ms in window_ms if ms > self._slow_threshold_ms)
        slow_pct = (slow / n_window) * 100

        return (
            f"avg={statistics.fmean(window_ms):7.1f} ms | "
            f"min={min(window_ms):7.1f} ms | "
            f"max={max(window_ms):7.1f} ms | "
            f"slow={slow_pct:5.1f}% | "
            f"win={n_window}/{self._window.maxlen} | "
            f"total={self._total_seen}"
        )
