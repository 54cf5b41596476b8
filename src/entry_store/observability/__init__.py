"""
entry_store.observability

Observability package.

Responsibilities:
- Structured logging configuration shared by the connection, schema and store layers.
"""

# Package marker.
