"""
tests.conftest

Shared fixtures: a file-backed SQLite database and a deterministic session clock.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio

from entry_store.db.clock import SessionClock
from entry_store.settings import DBSettings
from entry_store.store import SQLMemory, open_memory

MOSCOW = ZoneInfo("Europe/Moscow")


class StepClock(SessionClock):
    """Advances one second per `now()` call."""

    def __init__(self, tz: ZoneInfo = MOSCOW) -> None:
        super().__init__(tz)
        self._next = datetime(2024, 1, 1, 12, 0, 0, tzinfo=tz)

    def now(self) -> datetime:
        current = self._next
        self._next += timedelta(seconds=1)
        return current


class ListClock(SessionClock):
    """Returns the given instants in order."""

    def __init__(self, tz: ZoneInfo, instants: list[datetime]) -> None:
        super().__init__(tz)
        self._instants = iter(instants)

    def now(self) -> datetime:
        return next(self._instants)


@pytest.fixture
def db_settings(tmp_path: Path) -> DBSettings:
    return DBSettings(
        driver="sqlite+aiosqlite",
        name=str(tmp_path / "entries.db"),
        user="tester",
    )


@pytest_asyncio.fixture
async def memory(db_settings: DBSettings) -> AsyncIterator[SQLMemory]:
    store = await open_memory(db_settings, clock=StepClock())
    try:
        yield store
    finally:
        await store.close()
