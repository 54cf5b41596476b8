from __future__ import annotations

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from structlog.testing import capture_logs

from entry_store.db.query_log import install_query_logging


def _events(logs: list[dict]) -> list[str]:
    return [entry["event"] for entry in logs]


def test_fast_statements_are_quiet_by_default() -> None:
    engine = create_engine("sqlite://")
    install_query_logging(engine)
    with capture_logs() as logs, engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    assert "slow_query" not in _events(logs)
    assert "sql_statement" not in _events(logs)


def test_slow_statements_warn() -> None:
    engine = create_engine("sqlite://")
    install_query_logging(engine, slow_threshold=0.0)
    with capture_logs() as logs, engine.connect() as conn:
        conn.execute(text("SELECT 1"))

    slow = [entry for entry in logs if entry["event"] == "slow_query"]
    assert slow
    assert slow[0]["log_level"] == "warning"
    assert slow[0]["statement"] == "SELECT 1"
    assert slow[0]["elapsed_ms"] >= 0


def test_debug_mode_traces_every_statement() -> None:
    engine = create_engine("sqlite://")
    install_query_logging(engine, debug=True)
    with capture_logs() as logs, engine.connect() as conn:
        conn.execute(text("SELECT 1"))
        conn.execute(text("SELECT 2"))

    traced = [entry["statement"] for entry in logs if entry["event"] == "sql_statement"]
    assert traced == ["SELECT 1", "SELECT 2"]


def test_failed_statements_are_logged() -> None:
    engine = create_engine("sqlite://")
    install_query_logging(engine, debug=True)
    with capture_logs() as logs, engine.connect() as conn:
        with pytest.raises(OperationalError):
            conn.execute(text("SELECT * FROM missing_table"))
        conn.execute(text("SELECT 1"))

    failed = [entry for entry in logs if entry["event"] == "query_failed"]
    assert len(failed) == 1
    assert "missing_table" in failed[0]["statement"]
    # Timing bookkeeping stays balanced after an error.
    assert _events(logs)[-1] == "sql_statement"
