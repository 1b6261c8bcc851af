"""Shared pytest fixtures for the full ocdstartup test suite."""

from __future__ import annotations

import io
from typing import Iterator

import pytest
from loguru import logger

from ocdstartup.telemetry.logger import StartupLogger


@pytest.fixture(autouse=True)
def _reset_loguru_handlers() -> Iterator[None]:
    """Drop loguru handlers installed by a test so sinks never outlive it."""

    yield
    logger.remove()


@pytest.fixture
def log_sink() -> io.StringIO:
    """Provide an in-memory sink capturing every startup log level."""

    return io.StringIO()


@pytest.fixture
def startup_logger(log_sink: io.StringIO) -> StartupLogger:
    """Provide a logger attached to `log_sink` at the most verbose debug level."""

    return StartupLogger(log_sink, debug_level=4)
