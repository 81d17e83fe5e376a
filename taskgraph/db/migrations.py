"""Database initialisation helpers.

``init_db(conn)`` is idempotent — safe to call on an existing database.
"""

from __future__ import annotations

import sqlite3

from taskgraph.config import settings
from taskgraph.db.connection import translate_errors

SCHEMA_VERSION = 1


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _read_schema() -> str:
    """Load schema.sql from the package directory."""
    return settings.schema_path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def init_db(conn: sqlite3.Connection) -> None:
    """Create the ``nodes`` and ``edges`` tables and their indexes.

    This function is **idempotent**: every DDL statement uses ``IF NOT EXISTS``
    so calling it multiple times on the same database is safe.  The schema
    version is recorded in ``PRAGMA user_version``.

    Args:
        conn: An open, configured SQLite connection.
    """
    sql = _read_schema()
    with translate_errors():
        # executescript() issues an implicit COMMIT before execution, which is
        # fine for DDL-only scripts.
        conn.executescript(sql)
        conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION:d}")


def current_version(conn: sqlite3.Connection) -> int:
    """Return the schema version stamped on the database (0 if never initialised)."""
    row = conn.execute("PRAGMA user_version").fetchone()
    return row[0] if row else 0
