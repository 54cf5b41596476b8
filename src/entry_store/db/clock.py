"""
entry_store.db.clock

Session clock for store-produced timestamps.

Responsibilities:
- Produce "now" in the configured timezone, never the host's local time.
- Store naive UTC in DATETIME columns and hand back timestamps in the configured zone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo


class SessionClock:
    def __init__(self, tz: ZoneInfo) -> None:
        # Resolved once at store construction; see `DBSettings.zone`.
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def to_column(self, value: datetime) -> datetime:
        # Naive input is read as wall time in the configured zone.
        if value.tzinfo is None:
            value = value.replace(tzinfo=self.tz)
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def from_column(self, value: datetime | None) -> datetime | None:
        """
        Columns hold naive UTC. The result carries the zone's offset at that instant as a
        fixed-offset tzinfo, so results order by instant across the repeated DST hour.
        """

        if value is None:
            return None
        local = value.replace(tzinfo=timezone.utc).astimezone(self.tz)
        return local.replace(tzinfo=timezone(local.utcoffset()))
