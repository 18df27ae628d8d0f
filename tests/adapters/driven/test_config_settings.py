"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from src.adapters.driven.config.settings import Settings, load_settings
from src.core.samples import SampleOverflow

__all__ = []

PROBE_ENV_VARS = (
    "PROBE_URL",
    "PROBE_INTERVAL_US",
    "PROBE_TIMEOUT_MS",
    "PROBE_RESOLVE",
    "SAMPLE_BUFFER_SIZE",
    "SAMPLE_OVERFLOW",
    "STATS_WINDOW_SIZE",
    "STATS_REPORT_EVERY",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove probe variables possibly loaded from a local .env file.

    Returns:
        The monkeypatch fixture, for setting variables in the test.
    """
    for name in PROBE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults() -> None:
    """Settings should fill optional fields with defaults."""
    settings = Settings(interval_us=1000, url="http://localhost:9999/ping")

    assert settings.timeout_ms == 5000
    assert settings.resolve == ""
    assert settings.sample_buffer_size == 100
    assert settings.sample_overflow is SampleOverflow.BLOCK
    assert settings.stats_window_size == 100
    assert settings.stats_report_every == 10


def test_settings_accepts_https_url() -> None:
    """Settings should accept https endpoints."""
    settings = Settings(interval_us=1000, url="https://example.com/health")

    assert settings.url == "https://example.com/health"


@pytest.mark.parametrize("url", ["ftp://example.com/file", "not a url", ""])
def test_settings_rejects_invalid_url(url: str) -> None:
    """Settings should reject non-http(s) or malformed URLs."""
    with pytest.raises(ValidationError, match="Invalid probe URL"):
        Settings(interval_us=1000, url=url)


def test_settings_rejects_non_positive_interval() -> None:
    """Settings should reject a zero interval."""
    with pytest.raises(ValidationError):
        Settings(interval_us=0, url="http://localhost:9999/ping")


def test_settings_rejects_malformed_resolve() -> None:
    """Settings should reject a resolve override without three fields."""
    with pytest.raises(ValidationError, match="host:port:ip"):
        Settings(interval_us=1000, url="http://localhost/ping", resolve="example.com:443")


def test_settings_rejects_unknown_overflow_policy() -> None:
    """Settings should only accept known overflow policies."""
    with pytest.raises(ValidationError):
        Settings(interval_us=1000, url="http://localhost/ping", sample_overflow="drop_newest")


def test_settings_load_settings_success(clean_env) -> None:
    """Load Settings should create Settings object when the input is valid."""
    clean_env.setenv("PROBE_URL", "http://example.com/ping")
    clean_env.setenv("PROBE_INTERVAL_US", "1000")
    clean_env.setenv("PROBE_TIMEOUT_MS", "2000")
    clean_env.setenv("PROBE_RESOLVE", "example.com:80:203.0.113.5")
    clean_env.setenv("SAMPLE_OVERFLOW", "drop_oldest")

    settings = load_settings()

    assert isinstance(settings, Settings)
    assert settings.interval_us == 1000
    assert settings.timeout_ms == 2000
    assert settings.resolve == "example.com:80:203.0.113.5"
    assert settings.sample_overflow is SampleOverflow.DROP_OLDEST


def test_settings_load_settings_missing_url(clean_env) -> None:
    """Load Settings should raise when PROBE_URL is missing."""
    clean_env.setenv("PROBE_INTERVAL_US", "1000")

    with pytest.raises(RuntimeError, match="PROBE_URL"):
        load_settings()


def test_settings_load_settings_missing_interval(clean_env) -> None:
    """Load Settings should raise when PROBE_INTERVAL_US is missing."""
    clean_env.setenv("PROBE_URL", "http://example.com/ping")

    with pytest.raises(RuntimeError, match="PROBE_INTERVAL_US"):
        load_settings()


def test_settings_load_settings_failure(clean_env) -> None:
    """Load Settings should raise exceptions when at least one input is invalid."""
    clean_env.setenv("PROBE_URL", "http://example.com/ping")

    # Invalid interval
    clean_env.setenv("PROBE_INTERVAL_US", "-5")
    with pytest.raises(RuntimeError, match="PROBE_INTERVAL_US must be a positive integer"):
        load_settings()

    # Non-numeric timeout
    clean_env.setenv("PROBE_INTERVAL_US", "1000")
    clean_env.setenv("PROBE_TIMEOUT_MS", "soon")
    with pytest.raises(RuntimeError, match="PROBE_TIMEOUT_MS must be an integer"):
        load_settings()


def test_settings_load_settings_invalid_url(clean_env) -> None:
    """Load Settings should surface model validation as ValueError."""
    clean_env.setenv("PROBE_URL", "ftp://example.com/file")
    clean_env.setenv("PROBE_INTERVAL_US", "1000")

    with pytest.raises(ValueError, match="Invalid probe URL"):
        load_settings()
