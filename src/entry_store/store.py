"""
entry_store.store

The entry store: the CRUD/query surface consumed by application code.

Responsibilities:
- Define the `Memory` contract.
- Implement it over a pooled async engine (`SQLMemory`).
- Provide `open_memory`, the single composition root: validate settings, connect,
  probe, migrate, and hand back a ready store.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import ColumnElement, MetaData, Row, Table, insert, select, true, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from entry_store.db.clock import SessionClock
from entry_store.db.schema import migrate, table_prefix
from entry_store.db.session import create_engine, verify_connection
from entry_store.db.tables import entries_table
from entry_store.errors import BackendError, NotFoundError, PersistenceError, StoreError
from entry_store.models import Entry, EntryFilter
from entry_store.observability.logging import get_logger
from entry_store.settings import DBSettings

log = get_logger(__name__)


@runtime_checkable
class Memory(Protocol):
    async def is_entry_exists(self, probe: EntryFilter | Entry) -> bool: ...

    async def get_all_entries(self) -> list[Entry]: ...

    async def get_entries_like_name(self, name_pattern: str) -> list[Entry]: ...

    async def get_entry(self, key: str) -> Entry: ...

    async def save_entry(self, entry: Entry) -> Entry: ...


class SQLMemory:
    """
    `Memory` over one entries table.

    Each call checks out its own connection and is its own atomic unit; nothing here
    composes multiple writes, so no call opens a transaction around another.
    """

    def __init__(self, *, engine: AsyncEngine, table: Table, clock: SessionClock) -> None:
        self._engine = engine
        self._table = table
        self._clock = clock

    @property
    def table_name(self) -> str:
        return self._table.name

    async def __aenter__(self) -> SQLMemory:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._engine.dispose()

    async def is_entry_exists(self, probe: EntryFilter | Entry) -> bool:
        if isinstance(probe, Entry):
            probe = EntryFilter.from_entry(probe)
        stmt = select(self._table.c.id).where(*self._conditions(probe)).limit(1)
        rows = await self._fetch(stmt, op="is_entry_exists")
        return bool(rows)

    async def get_all_entries(self) -> list[Entry]:
        rows = await self._fetch(select(self._table), op="get_all_entries")
        return [self._to_entry(row) for row in rows]

    async def get_entries_like_name(self, name_pattern: str) -> list[Entry]:
        # Matches `key` exactly; no LIKE and no `name` column involved.
        stmt = select(self._table).where(self._table.c.key == name_pattern)
        rows = await self._fetch(stmt, op="get_entries_like_name")
        return [self._to_entry(row) for row in rows]

    async def get_entry(self, key: str) -> Entry:
        stmt = (
            select(self._table)
            .where(self._table.c.key == key)
            .order_by(self._table.c.id)
            .limit(1)
        )
        rows = await self._fetch(stmt, op="get_entry")
        if not rows:
            raise NotFoundError(key)
        return self._to_entry(rows[0])

    async def save_entry(self, entry: Entry) -> Entry:
        """
        Insert when `entry.id == 0`, otherwise replace key/name/value of the row with
        that id (inserting it under that id if it is gone). `updated_at` is always
        refreshed; `created_at` is only written on insert. Returns the stored row.
        """

        t = self._table
        stamp = self._clock.to_column(self._clock.now())
        fields = {"key": entry.key, "name": entry.name, "value": entry.value}
        try:
            async with self._engine.begin() as conn:
                entry_id = entry.id
                updated = 0
                if entry.is_persisted:
                    result = await conn.execute(
                        update(t).where(t.c.id == entry_id).values(**fields, updated_at=stamp)
                    )
                    updated = result.rowcount
                if not updated:
                    values: dict[str, Any] = dict(fields, created_at=stamp, updated_at=stamp)
                    if entry.is_persisted:
                        values["id"] = entry_id
                    result = await conn.execute(insert(t).values(**values))
                    entry_id = result.inserted_primary_key[0]
                row = (await conn.execute(select(t).where(t.c.id == entry_id))).one()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"save entry key={entry.key!r}: {exc}") from exc

        log.debug("entry_saved", id=row.id, key=row.key, inserted=not updated)
        return self._to_entry(row)

    def _conditions(self, probe: EntryFilter) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        for column, value in probe.constraints().items():
            if isinstance(value, datetime):
                value = self._clock.to_column(value)
            conditions.append(self._table.c[column] == value)
        return conditions or [true()]

    async def _fetch(self, stmt: Any, *, op: str) -> Sequence[Row[Any]]:
        try:
            async with self._engine.connect() as conn:
                return (await conn.execute(stmt)).all()
        except SQLAlchemyError as exc:
            raise BackendError(f"{op}: {exc}") from exc

    def _to_entry(self, row: Row[Any]) -> Entry:
        return Entry(
            id=row.id,
            key=row.key,
            name=row.name,
            value=bytes(row.value) if row.value is not None else b"",
            created_at=self._clock.from_column(row.created_at),
            updated_at=self._clock.from_column(row.updated_at),
        )


async def open_memory(settings: DBSettings, *, clock: SessionClock | None = None) -> SQLMemory:
    """
    Build a ready-to-use store from settings.

    Raises `ConfigurationError` (missing name/user, unknown timezone), `ConnectionError`
    (engine or probe failure) or `SchemaError` (migration failure). On any failure the
    engine is disposed and no store is returned.
    """

    clock = clock or SessionClock(settings.zone())

    engine = create_engine(settings)
    try:
        await verify_connection(engine)
        metadata = MetaData()
        table = entries_table(metadata, table_prefix(settings.table_prefix))
        await migrate(engine, metadata)
    except StoreError:
        await engine.dispose()
        raise

    log.info("store_ready", table=table.name, time_location=str(clock.tz))
    return SQLMemory(engine=engine, table=table, clock=clock)


# --- Module Notes -----------------------------------------------------------
# `get_entry` surfaces NotFoundError while `is_entry_exists`/listing report "no rows"
# as False/[]; callers rely on that asymmetry.
