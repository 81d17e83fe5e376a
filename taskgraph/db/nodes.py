"""CRUD operations for the ``nodes`` table."""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from taskgraph.errors import NodeNotFoundError
from taskgraph.models import Node, NodeID, from_millis, parse_node_id, to_millis

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _row_to_node(row: sqlite3.Row) -> Node:
    return Node(
        id=parse_node_id(row["uuid"]),
        title=row["title"],
        description=row["description"],
        scheduled=from_millis(row["scheduled"]),
        due=from_millis(row["due"]),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def insert_node(conn: sqlite3.Connection, node: Node) -> None:
    """Insert a new node row.

    ``node.id`` is assumed to be fresh; inserting an existing ID fails with an
    integrity error from SQLite.
    """
    with conn:
        conn.execute(
            """
            INSERT INTO nodes (uuid, title, description, scheduled, due)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                str(node.id),
                node.title,
                node.description,
                to_millis(node.scheduled),
                to_millis(node.due),
            ),
        )
    logger.debug("Inserted node %s", node.id)


def node_exists(conn: sqlite3.Connection, node_id: NodeID) -> bool:
    row = conn.execute(
        "SELECT 1 FROM nodes WHERE uuid = ?", (str(node_id),)
    ).fetchone()
    return row is not None


def exists_check(conn: sqlite3.Connection, node_id: NodeID) -> None:
    """Raise :class:`NodeNotFoundError` unless ``node_id`` is stored."""
    if not node_exists(conn, node_id):
        raise NodeNotFoundError(node_id)


def get_node(conn: sqlite3.Connection, node_id: NodeID) -> Optional[Node]:
    """Fetch a single node by its UUID.  Returns ``None`` if not found."""
    row = conn.execute(
        "SELECT * FROM nodes WHERE uuid = ?", (str(node_id),)
    ).fetchone()
    return _row_to_node(row) if row else None


def update_node(conn: sqlite3.Connection, node: Node) -> None:
    """Overwrite title, description and timestamps of an existing node.

    Raises:
        NodeNotFoundError: If ``node.id`` does not exist.
    """
    exists_check(conn, node.id)

    with conn:
        conn.execute(
            """
            UPDATE nodes
            SET    title = ?, description = ?, scheduled = ?, due = ?
            WHERE  uuid = ?
            """,
            (
                node.title,
                node.description,
                to_millis(node.scheduled),
                to_millis(node.due),
                str(node.id),
            ),
        )
    logger.debug("Updated node %s", node.id)


def list_nodes(conn: sqlite3.Connection) -> list[Node]:
    """Return all nodes ordered by identifier."""
    rows = conn.execute("SELECT * FROM nodes ORDER BY uuid").fetchall()
    return [_row_to_node(r) for r in rows]
