"""Configuration loading from environment variables."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

from src.ports.samples import SampleOverflow

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_SAMPLE_BUFFER_SIZE = 100
DEFAULT_STATS_WINDOW_SIZE = 100
DEFAULT_STATS_REPORT_EVERY = 10


class Settings(BaseModel):
    """Runtime configuration for the latency probe.

    Attributes:
        interval_us: Interval between requests in microseconds (must be positive).
        timeout_ms: Per-request timeout in milliseconds (0 disables it).
        url: HTTP(S) endpoint probed on every tick.
        resolve: Optional ``host:port:ip`` dial override.
        sample_buffer_size: Capacity of the latency sample queue.
        sample_overflow: Policy when the sample queue is full.
        stats_window_size: Samples kept for the latency summary.
        stats_report_every: Log the summary every N samples (0 disables it).
    """

    interval_us: int = Field(..., gt=0, description="Interval between requests in microseconds.")
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0, description="Request timeout (ms).")
    url: str = Field(..., description="HTTP endpoint probed on every tick.")
    resolve: str = Field(
        default="",
        description=(
            "Optional host:port:ip override. "
            "If set, connections dial ip:port and send Host: host."
        ),
    )
    sample_buffer_size: int = Field(default=DEFAULT_SAMPLE_BUFFER_SIZE, gt=0)
    sample_overflow: SampleOverflow = Field(default=SampleOverflow.BLOCK)
    stats_window_size: int = Field(default=DEFAULT_STATS_WINDOW_SIZE, gt=0)
    stats_report_every: int = Field(default=DEFAULT_STATS_REPORT_EVERY, ge=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that the target is a valid HTTP(S) URL.

        Args:
            v: URL to validate.

        Returns:
            The validated URL, unchanged.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http:// and https:// endpoints allowed")
        except Exception as e:
            raise ValueError(f"Invalid probe URL: {e}") from e
        return v

    @field_validator("resolve")
    @classmethod
    def validate_resolve(cls, v: str) -> str:
        """Validate the shape of the resolve override.

        Only the field count is checked here; the requester rejects bad ports
        and addresses when it starts.

        Args:
            v: Resolve override (can be empty).

        Returns:
            The validated override.

        Raises:
            ValueError: If a non-empty override is not host:port:ip.
        """
        if v and len(v.split(":")) != 3:
            raise ValueError(f"Resolve override must be host:port:ip (got: {v})")
        return v


def _int_env(name: str, default: int | None = None) -> int:
    raw = os.environ.get(name)
    if raw is None:
        if default is None:
            raise RuntimeError(f"Missing required environment variable: {name}")
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer (got: {raw})") from e


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    Required environment variables:
    - PROBE_URL: Valid HTTP(S) URL to probe.
    - PROBE_INTERVAL_US: Positive integer, microseconds between requests.

    Optional:
    - PROBE_TIMEOUT_MS: Request timeout in milliseconds (default 5000).
    - PROBE_RESOLVE: host:port:ip dial override.
    - SAMPLE_BUFFER_SIZE: Sample queue capacity (default 100).
    - SAMPLE_OVERFLOW: "block" or "drop_oldest" (default "block").
    - STATS_WINDOW_SIZE: Latency summary window (default 100).
    - STATS_REPORT_EVERY: Log the summary every N samples (default 10).

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars missing or not integers.
        ValueError: If configuration is invalid.
    """
    try:
        url = os.environ["PROBE_URL"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    interval_us = _int_env("PROBE_INTERVAL_US")
    if interval_us <= 0:
        raise RuntimeError(
            f"PROBE_INTERVAL_US must be a positive integer (got: {interval_us})"
        )

    settings = Settings(
        interval_us=interval_us,
        timeout_ms=_int_env("PROBE_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        url=url,
        resolve=os.getenv("PROBE_RESOLVE", ""),
        sample_buffer_size=_int_env("SAMPLE_BUFFER_SIZE", DEFAULT_SAMPLE_BUFFER_SIZE),
        sample_overflow=os.getenv("SAMPLE_OVERFLOW", SampleOverflow.BLOCK.value),
        stats_window_size=_int_env("STATS_WINDOW_SIZE", DEFAULT_STATS_WINDOW_SIZE),
        stats_report_every=_int_env("STATS_REPORT_EVERY", DEFAULT_STATS_REPORT_EVERY),
    )

    logger.info(
        f"Probe configured: url={settings.url}, "
        f"interval={settings.interval_us}us, "
        f"timeout={settings.timeout_ms}ms, "
        f"resolve={settings.resolve or '<disabled>'}, "
        f"buffer={settings.sample_buffer_size} ({settings.sample_overflow.value})"
    )

    return settings
