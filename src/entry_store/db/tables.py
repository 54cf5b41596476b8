"""
entry_store.db.tables

Core table definition for entries.

Responsibilities:
- Build the `entries` table (plus indexes) on a MetaData, under an optional name prefix.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Column, DateTime, LargeBinary, MetaData, String, Table
from sqlalchemy.dialects import mysql, sqlite

ENTRIES = "entries"

# BIGINT autoincrement does not work on SQLite; INTEGER PRIMARY KEY is its rowid alias.
_ID = BigInteger().with_variant(sqlite.INTEGER(), "sqlite")
# Microsecond precision keeps updated_at strictly increasing between rapid saves.
_TIMESTAMP = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql", "mariadb")


def entries_table(metadata: MetaData, prefix: str = "") -> Table:
    return Table(
        f"{prefix}{ENTRIES}",
        metadata,
        Column("id", _ID, primary_key=True, autoincrement=True),
        Column("created_at", _TIMESTAMP, nullable=False, index=True),
        Column("updated_at", _TIMESTAMP, nullable=False, index=True),
        Column("key", String(255), nullable=False, index=True),
        Column("name", String(255), nullable=False, index=True),
        Column("value", LargeBinary().with_variant(mysql.LONGBLOB(), "mysql", "mariadb")),
    )


# --- Module Notes -----------------------------------------------------------
# `key` is not unique: several rows may share one. Callers that need one key per
# entry must enforce it themselves.
