"""
entry_store.db.query_log

SQL statement logging hooked into SQLAlchemy engine events.

Responsibilities:
- Warn about statements slower than the slow-query threshold.
- Trace every statement when debug mode is on.
- Log backend errors raised while executing statements.
"""

from __future__ import annotations

import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Engine, ExceptionContext

from entry_store.observability.logging import get_logger

log = get_logger(__name__)

SLOW_QUERY_THRESHOLD_SECONDS = 3.0

_START_TIMES = "entry_store_query_start"


def install_query_logging(
    engine: Engine,
    *,
    debug: bool = False,
    slow_threshold: float = SLOW_QUERY_THRESHOLD_SECONDS,
) -> None:
    # Listeners must be attached to the sync engine behind an AsyncEngine.

    @event.listens_for(engine, "before_cursor_execute")
    def _before(
        conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool
    ) -> None:
        conn.info.setdefault(_START_TIMES, []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _after(
        conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: bool
    ) -> None:
        elapsed = time.perf_counter() - conn.info[_START_TIMES].pop()
        elapsed_ms = round(elapsed * 1000, 3)
        if elapsed >= slow_threshold:
            log.warning(
                "slow_query", statement=statement, elapsed_ms=elapsed_ms, rows=cursor.rowcount
            )
        elif debug:
            log.info(
                "sql_statement", statement=statement, elapsed_ms=elapsed_ms, rows=cursor.rowcount
            )

    @event.listens_for(engine, "handle_error")
    def _on_error(context: ExceptionContext) -> None:
        if context.connection is not None:
            starts = context.connection.info.get(_START_TIMES)
            if starts:
                starts.pop()
        log.warning(
            "query_failed",
            statement=context.statement,
            error=repr(context.original_exception),
        )
