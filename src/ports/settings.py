"""Settings port definition (DTO)."""

from dataclasses import dataclass

from src.ports.samples import SampleOverflow

__all__ = ["SettingsPort"]


@dataclass
class SettingsPort:
    """Runtime settings for the requester and its consumer.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        interval_us: Microseconds between requests.
        timeout_ms: Per-request timeout in milliseconds.
        url: Target URL probed on every tick.
        resolve: Optional ``host:port:ip`` dial override ("" disables it).
        sample_buffer_size: Capacity of the latency sample queue.
        sample_overflow: Policy when the sample queue is full.
        stats_window_size: Samples kept for the latency summary.
        stats_report_every: Log the summary every N samples (0 disables it).
    """

    interval_us: int
    timeout_ms: int
    url: str
    resolve: str = ""
    sample_buffer_size: int = 100
    sample_overflow: SampleOverflow = SampleOverflow.BLOCK
    stats_window_size: int = 100
    stats_report_every: int = 10
