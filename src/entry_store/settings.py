"""
entry_store.settings

Database configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the connection, schema and store layers.
- Hide the database password from repr/logging.
- Offer a cached settings instance for process-wide reuse.
"""

from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from entry_store.errors import ConfigurationError


class DBSettings(BaseSettings):
    """
    Connection/session settings, read from `DB_*` environment variables.

    `name` and `user` are required for store construction but default to None here so
    that a missing value surfaces as `ConfigurationError` from `open_memory` rather than
    as a pydantic error at import/load time.
    """

    model_config = SettingsConfigDict(env_prefix="DB_", case_sensitive=False)

    # SQLAlchemy "dialect+driver"; tests use sqlite+aiosqlite.
    driver: str = "mysql+aiomysql"

    host: str = "localhost"
    port: int = 3306
    name: str | None = None
    user: str | None = None
    password: str = Field(default="", repr=False)
    conn_timeout: int = Field(default=5000, description="Connect timeout, milliseconds.")
    table_prefix: str = ""

    # Pool
    max_open_conns: int = 10
    max_idle_conns: int = 5
    conn_max_lifetime_mins: int = 5

    debug_mode: bool = False
    time_location: str = "Europe/Moscow"

    def require_complete(self) -> None:
        missing = [field for field in ("name", "user") if not getattr(self, field)]
        if missing:
            raise ConfigurationError(
                "missing required database settings: "
                + ", ".join(f"DB_{field.upper()}" for field in missing)
            )

    def zone(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.time_location)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise ConfigurationError(f"unknown time location: {self.time_location!r}") from exc


def load_settings(**overrides: object) -> DBSettings:
    try:
        return DBSettings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


@lru_cache(maxsize=1)
def get_settings() -> DBSettings:
    # Cache avoids re-parsing env vars on every call.
    return load_settings()


# --- Module Notes -----------------------------------------------------------
# Environment variable names follow the field names: DB_HOST, DB_CONN_TIMEOUT,
# DB_MAX_OPEN_CONNS, DB_TIME_LOCATION, ...
