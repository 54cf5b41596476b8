"""
entry_store.models

Entry domain models.

Responsibilities:
- Define the persisted record type (`Entry`).
- Define the explicit probe type (`EntryFilter`) used for partial-match lookups.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Entry:
    """
    A named opaque value stored under `key`.

    `id == 0` marks a record that has not been persisted yet; the backend assigns
    the identity on first save. Timestamps are owned by the store.
    """

    key: str = ""
    name: str = ""
    value: bytes = b""
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id != 0


@dataclass(frozen=True, slots=True)
class EntryFilter:
    """
    Equality filter over Entry columns. `None` leaves a column unconstrained;
    any other value, including `""` and `b""`, must match exactly.
    """

    id: int | None = None
    key: str | None = None
    name: str | None = None
    value: bytes | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entry(cls, entry: Entry) -> EntryFilter:
        # Zero-valued fields of a plain Entry probe are treated as "don't care".
        return cls(
            id=entry.id or None,
            key=entry.key or None,
            name=entry.name or None,
            value=entry.value or None,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )

    def constraints(self) -> dict[str, object]:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {column: value for column, value in values.items() if value is not None}
