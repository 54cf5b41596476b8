"""
entry_store.db.session

Async SQLAlchemy engine setup (connection manager).

Responsibilities:
- Build the connection URL from settings.
- Create the pooled async engine with the configured pool limits and connect timeout.
- Verify liveness with an explicit round trip before the engine is handed out.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import URL, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from entry_store import errors
from entry_store.db.query_log import install_query_logging
from entry_store.observability.logging import get_logger
from entry_store.settings import DBSettings

log = get_logger(__name__)


def get_connection_url(settings: DBSettings) -> URL:
    # URL.create quotes credentials, so "@", ":" and "/" in passwords are safe.
    if settings.driver.startswith("sqlite"):
        return URL.create(settings.driver, database=settings.name)
    return URL.create(
        settings.driver,
        username=settings.user,
        password=settings.password or None,
        host=settings.host,
        port=settings.port,
        database=settings.name,
    )


def pool_options(settings: DBSettings) -> dict[str, Any]:
    """
    Map max-open/max-idle/lifetime limits onto QueuePool arguments.

    QueuePool keeps `pool_size` connections around (the idle limit) and opens up to
    `max_overflow` extra ones under load, so the open limit is their sum. A
    non-positive open limit means "unbounded", as does overflow -1.
    """

    idle = max(settings.max_idle_conns, 1)
    if settings.max_open_conns > 0:
        pool_size = min(idle, settings.max_open_conns)
        max_overflow = settings.max_open_conns - pool_size
    else:
        pool_size = idle
        max_overflow = -1

    options: dict[str, Any] = {"pool_size": pool_size, "max_overflow": max_overflow}
    if settings.conn_max_lifetime_mins > 0:
        options["pool_recycle"] = settings.conn_max_lifetime_mins * 60
    return options


def _connect_args(url: URL, settings: DBSettings) -> dict[str, Any]:
    timeout = settings.conn_timeout / 1000
    if url.get_backend_name() == "sqlite":
        return {"timeout": timeout}
    return {"connect_timeout": timeout}


def create_engine(settings: DBSettings) -> AsyncEngine:
    """
    Open the pooled engine. Nothing connects yet; call `verify_connection` next.
    """

    settings.require_complete()
    url = get_connection_url(settings)
    try:
        engine = create_async_engine(
            url,
            poolclass=AsyncAdaptedQueuePool,
            pool_pre_ping=True,
            connect_args=_connect_args(url, settings),
            **pool_options(settings),
        )
    except (SQLAlchemyError, ImportError) as exc:
        raise errors.ConnectionError(f"open engine for {url!r}: {exc}") from exc

    install_query_logging(engine.sync_engine, debug=settings.debug_mode)
    return engine


async def verify_connection(engine: AsyncEngine) -> None:
    # Engine creation is lazy; this is the first real round trip to the backend.
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        raise errors.ConnectionError(f"ping {engine.url!r}: {exc}") from exc
    log.info("db_connected", url=repr(engine.url))


# --- Module Notes -----------------------------------------------------------
# `repr(URL)` masks the password, so URLs are safe to put in logs and error messages.
