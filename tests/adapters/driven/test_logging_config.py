"""Tests for logging setup."""

import logging
import re
import sys
from collections.abc import Iterator

import pytest

from src.adapters.driven.logging.logging_config import EVENTS_LOGGER, configure_logs

__all__ = []

EVENT_LINE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \| ")


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo handler and propagation changes made by configure_logs()."""
    root = logging.getLogger()
    events = logging.getLogger(EVENTS_LOGGER)
    root_handlers, root_level = list(root.handlers), root.level
    event_handlers, event_level = list(events.handlers), events.level
    yield
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
    events.handlers[:] = event_handlers
    events.setLevel(event_level)
    events.propagate = True


def make_record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord(EVENTS_LOGGER, logging.ERROR, __file__, 1, msg, args, None)


def test_configure_logs_sends_events_to_stdout_only(restore_logging) -> None:
    """Event lines should go to a dedicated stdout handler and not propagate."""
    configure_logs()

    events = logging.getLogger(EVENTS_LOGGER)
    handler = events.handlers[-1]

    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stdout
    assert events.propagate is False


def test_configure_logs_formats_error_line(restore_logging) -> None:
    """Error events should render as '<timestamp> | error | <ms>ms | <message>'."""
    configure_logs()
    formatter = logging.getLogger(EVENTS_LOGGER).handlers[-1].formatter

    line = formatter.format(make_record("error | %6dms | %s", 12, "connection refused"))

    assert EVENT_LINE.match(line)
    assert line.endswith(" | error |     12ms | connection refused")


def test_configure_logs_formats_slow_line(restore_logging) -> None:
    """Slow events should carry elapsed time, body and request id."""
    configure_logs()
    formatter = logging.getLogger(EVENTS_LOGGER).handlers[-1].formatter

    line = formatter.format(make_record("slow | %6dms | %s | %d", 612, "pong", 42))

    assert EVENT_LINE.match(line)
    assert line.endswith(" | slow |    612ms | pong | 42")


def test_configure_logs_quiets_framework_loggers(restore_logging) -> None:
    """aiohttp and asyncio should log at WARNING, the application at DEBUG."""
    configure_logs()

    assert logging.getLogger("aiohttp").level == logging.WARNING
    assert logging.getLogger("asyncio").level == logging.WARNING
    assert logging.getLogger("src").level == logging.DEBUG
