"""Row-oriented graph store backed by SQLite."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from taskgraph.config import settings
from taskgraph.db import edges, nodes
from taskgraph.db.connection import get_connection, translate_errors
from taskgraph.db.migrations import init_db
from taskgraph.errors import NodeNotFoundError
from taskgraph.models import Node, NodeID

logger = logging.getLogger(__name__)


class SqliteStore:
    """Graph store that issues one query per operation against ``nodes``/``edges``.

    Every public method maps ``sqlite3`` failures to :class:`StorageError`.
    There is no transaction spanning several methods.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @classmethod
    def open(cls, db_path: Optional[Path] = None) -> SqliteStore:
        """Open (creating if needed) the database at ``db_path``."""
        path = db_path or settings.db_path
        conn = get_connection(path)
        init_db(conn)
        logger.info("SqliteStore ready db=%s", path)
        return cls(conn)

    def close(self) -> None:
        self._conn.close()

    # ---- mutations ----

    def add(self, node: Node) -> None:
        with translate_errors():
            nodes.insert_node(self._conn, node)

    def update(self, node: Node) -> None:
        with translate_errors():
            nodes.update_node(self._conn, node)

    def connect(self, from_id: NodeID, to_id: NodeID) -> None:
        with translate_errors():
            edges.connect_nodes(self._conn, from_id, to_id)

    # ---- queries ----

    def get(self, node_id: NodeID) -> Node:
        with translate_errors():
            node = nodes.get_node(self._conn, node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def exists(self, node_id: NodeID) -> bool:
        with translate_errors():
            return nodes.node_exists(self._conn, node_id)

    def exists_check(self, node_id: NodeID) -> None:
        with translate_errors():
            nodes.exists_check(self._conn, node_id)

    def has_children(self, node_id: NodeID) -> bool:
        with translate_errors():
            return edges.has_children(self._conn, node_id)

    def get_children(self, node_id: NodeID) -> list[NodeID]:
        with translate_errors():
            return edges.get_children(self._conn, node_id)

    def get_roots(self) -> list[NodeID]:
        with translate_errors():
            return edges.get_roots(self._conn)

    def list_nodes(self) -> list[Node]:
        with translate_errors():
            return nodes.list_nodes(self._conn)
