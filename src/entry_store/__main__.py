"""
entry_store.__main__

Entrypoint for `python -m entry_store`.

Responsibilities:
- Load settings from the environment.
- Connect, create missing tables, report readiness, and exit.
"""

from __future__ import annotations

import asyncio
import sys

from entry_store.errors import StoreError
from entry_store.observability.logging import configure_logging, get_logger
from entry_store.settings import DBSettings, get_settings
from entry_store.store import open_memory

log = get_logger(__name__)


async def _bootstrap(settings: DBSettings) -> None:
    memory = await open_memory(settings)
    async with memory:
        entries = await memory.get_all_entries()
        log.info("bootstrap_done", table=memory.table_name, entries=len(entries))


def main() -> int:
    try:
        settings = get_settings()
        configure_logging(settings, service_name="entry-store")
        asyncio.run(_bootstrap(settings))
    except StoreError as exc:
        log.error("bootstrap_failed", error=str(exc), error_type=type(exc).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
