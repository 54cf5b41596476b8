"""
entry_store.observability.logging

Structured logging configuration for processes hosting the store.

Responsibilities:
- Configure `structlog` for JSON logs on stdout, tagged with the store's database context.
- Decide, from `DBSettings.debug_mode`, which query-log events reach the output:
  statement traces in debug mode, otherwise only slow and failed statements.
- Keep SQLAlchemy's own engine logger quiet; statements are logged by `db.query_log`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from entry_store.settings import DBSettings

QUERY_LOGGER = "entry_store.db.query_log"


def configure_logging(
    settings: DBSettings,
    *,
    service_name: str = "entry-store",
    level: str | None = None,
) -> None:
    """
    Call once at process startup. `level` defaults to DEBUG in debug mode, else INFO.
    """

    root_level = level or ("DEBUG" if settings.debug_mode else "INFO")
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, root_level.upper(), logging.INFO),
    )
    logging.getLogger(QUERY_LOGGER).setLevel(query_log_level(settings))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            store_context(service_name, settings),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def query_log_level(settings: DBSettings) -> int:
    # `sql_statement` traces are INFO, `slow_query`/`query_failed` are WARNING.
    return logging.INFO if settings.debug_mode else logging.WARNING


def store_context(service_name: str, settings: DBSettings):
    database = f"{settings.host}:{settings.port}/{settings.name}"
    if settings.driver.startswith("sqlite"):
        database = settings.name

    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("database", database)
        if settings.table_prefix:
            event_dict.setdefault("table_prefix", settings.table_prefix)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Library code only calls `get_logger`; configuring output is left to the host
# process (see `entry_store.__main__`).
