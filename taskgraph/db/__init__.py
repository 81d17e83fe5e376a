"""Database layer package.

Public re-exports so callers can write::

    from taskgraph.db import SqliteStore, get_connection, init_db
"""

from taskgraph.db.connection import get_connection
from taskgraph.db.migrations import init_db
from taskgraph.db.store import SqliteStore

__all__ = ["get_connection", "init_db", "SqliteStore"]
