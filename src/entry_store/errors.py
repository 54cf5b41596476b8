"""
entry_store.errors

Error taxonomy for the entry store.

Responsibilities:
- Separate construction-time failures (config, connection, schema) from
  per-operation failures (not found, persistence, backend).
- Keep backend driver exceptions chained (`raise ... from exc`) for diagnostics.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for every error raised by `entry_store`."""


class ConfigurationError(StoreError):
    # Missing/invalid settings, including an unknown timezone name.
    pass


class ConnectionError(StoreError):  # noqa: A001
    # Engine creation or the liveness probe failed.
    pass


class SchemaError(StoreError):
    pass


class NotFoundError(StoreError):
    """Raised only by single-key lookup; listing/existence treat no rows as a result."""

    def __init__(self, key: str) -> None:
        super().__init__(f"entry not found: key={key!r}")
        self.key = key


class PersistenceError(StoreError):
    pass


class BackendError(StoreError):
    pass


# --- Module Notes -----------------------------------------------------------
# `ConnectionError` shadows the builtin inside this module; import the module as
# `from entry_store import errors` and refer to `errors.ConnectionError`.
