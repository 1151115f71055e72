"""
Pytest fixtures for the binder kernel test suite.

Provides:
- Logging reset between tests
- A JSON log capture handler for asserting on binder log output
"""

import json
import logging
from io import StringIO

import pytest

from binder_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: property-based tests with many examples"
    )


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def captured_logs():
    """Configure binder logging at DEBUG into a buffer; returns a reader."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(level=logging.DEBUG, handler=handler)

    def read() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return read
