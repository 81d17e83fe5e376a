"""Operations on the ``edges`` table.

Adjacency and root membership are recomputed by a query on every call; no
state is cached between calls.
"""

from __future__ import annotations

import logging
import sqlite3

from taskgraph.db.nodes import exists_check
from taskgraph.models import NodeID, parse_node_id

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def connect_nodes(conn: sqlite3.Connection, from_id: NodeID, to_id: NodeID) -> None:
    """Create a directed edge meaning "``from_id`` has child ``to_id``".

    Both endpoints are checked before anything is written.  Uses
    ``INSERT OR IGNORE`` so calling it twice with the same pair is safe.

    Raises:
        NodeNotFoundError: If either endpoint does not exist.
    """
    exists_check(conn, from_id)
    exists_check(conn, to_id)

    with conn:
        conn.execute(
            "INSERT OR IGNORE INTO edges (from_uuid, to_uuid) VALUES (?, ?)",
            (str(from_id), str(to_id)),
        )
    logger.debug("Connected %s -> %s", from_id, to_id)


def has_children(conn: sqlite3.Connection, node_id: NodeID) -> bool:
    exists_check(conn, node_id)
    row = conn.execute(
        "SELECT COUNT(*) FROM edges WHERE from_uuid = ?", (str(node_id),)
    ).fetchone()
    return row[0] > 0


def get_children(conn: sqlite3.Connection, node_id: NodeID) -> list[NodeID]:
    """Return the direct children of ``node_id`` in identifier order."""
    exists_check(conn, node_id)
    rows = conn.execute(
        """
        SELECT to_uuid
        FROM   edges
        WHERE  from_uuid = ?
        ORDER  BY to_uuid
        """,
        (str(node_id),),
    ).fetchall()
    return sorted(parse_node_id(r["to_uuid"]) for r in rows)


def get_roots(conn: sqlite3.Connection) -> list[NodeID]:
    """Return every node that is not the target of any edge."""
    rows = conn.execute(
        """
        SELECT n.uuid
        FROM   nodes n
        WHERE  NOT EXISTS (SELECT 1 FROM edges e WHERE e.to_uuid = n.uuid)
        ORDER  BY n.uuid
        """
    ).fetchall()
    return sorted(parse_node_id(r["uuid"]) for r in rows)
