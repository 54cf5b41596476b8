"""
entry_store.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the entries table, engine setup, schema bootstrap and query logging.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in here knows about the `Memory` contract; `entry_store.store` composes it.
