"""Healthcheck validator for container orchestration."""

import logging

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.logging.logging_config import configure_logs
from src.core.dial_override import parse_resolve
from src.core.errors import ResolveOverrideError

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Run health check for container orchestration.

    Validates:
    - Required environment variables are set.
    - Probe URL and numeric settings are valid.
    - Resolve override (if any) has a valid port and IP address.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
        parse_resolve(settings.resolve)
    except (RuntimeError, ValueError, ResolveOverrideError) as exc:
        logger.error(f"Latency probe healthcheck FAILED: {exc}")
        return 1

    logger.info("Latency probe healthcheck OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
