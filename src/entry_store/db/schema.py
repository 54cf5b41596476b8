"""
entry_store.db.schema

Schema bootstrap for the store.

Responsibilities:
- Compute the effective table-name prefix.
- Create missing tables/indexes before the store is handed out.
"""

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from entry_store.errors import SchemaError
from entry_store.observability.logging import get_logger

log = get_logger(__name__)


def table_prefix(prefix: str) -> str:
    # "app" -> "app_entries", never "appentries".
    return f"{prefix}_" if prefix else ""


async def migrate(engine: AsyncEngine, metadata: MetaData) -> None:
    """
    Create tables and indexes that don't exist yet; existing ones are left alone,
    so running this on every startup is safe. Failures are not retried.
    """

    try:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all, checkfirst=True)
    except SQLAlchemyError as exc:
        raise SchemaError(f"migrate {sorted(metadata.tables)}: {exc}") from exc
    log.info("schema_ready", tables=sorted(metadata.tables))


# --- Module Notes -----------------------------------------------------------
# Column changes are out of scope here; this only ever creates what is missing.
