"""
entry_store

Minimal persistent key-value store over a single relational table.

Responsibilities:
- Expose package version metadata and the public store surface, errors included.
"""

from entry_store.errors import (
    BackendError,
    ConfigurationError,
    ConnectionError,
    NotFoundError,
    PersistenceError,
    SchemaError,
    StoreError,
)
from entry_store.models import Entry, EntryFilter
from entry_store.settings import DBSettings
from entry_store.store import Memory, SQLMemory, open_memory

__all__ = [
    "BackendError",
    "ConfigurationError",
    "ConnectionError",
    "DBSettings",
    "Entry",
    "EntryFilter",
    "Memory",
    "NotFoundError",
    "PersistenceError",
    "SQLMemory",
    "SchemaError",
    "StoreError",
    "__version__",
    "open_memory",
]

__version__ = "0.1.0"
