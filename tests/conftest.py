"""
Pytest fixtures for the ledger test suite.

Provides:
- Structured logging configured once per session, LogContext cleared per test
- ``captured_logs`` for asserting on emitted JSON log records
- A deterministic clock
- An in-memory SQLite session for the SQL journal store
"""

import json
import logging
from datetime import datetime, timezone
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from ledger_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            session.auto_match()
            logs = captured_logs()
            assert any(r["message"] == "auto_match_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Clock fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing."""
    return DeterministicClock(datetime(2024, 6, 30, 9, 0, 0, tzinfo=timezone.utc))


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Fresh in-memory SQLite database with all ledger tables."""
    init_engine_from_url("sqlite:///:memory:")
    create_tables()
    db_session = get_session()
    try:
        yield db_session
    finally:
        db_session.close()
        reset_engine()
