"""The storage port shared by both backends, and a factory to open one.

The traversal engine, the fuzzy matcher and the CLI depend on the
:class:`GraphStore` protocol rather than a concrete backend, so the SQLite
store and the JSON snapshot are interchangeable.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from taskgraph.config import BACKENDS, Settings, settings as default_settings
from taskgraph.db.store import SqliteStore
from taskgraph.models import Node, NodeID
from taskgraph.snapshot import SnapshotGraph

logger = logging.getLogger(__name__)


class GraphStore(Protocol):
    def add(self, node: Node) -> None: ...

    def update(self, node: Node) -> None: ...

    def connect(self, from_id: NodeID, to_id: NodeID) -> None: ...

    def get(self, node_id: NodeID) -> Node: ...

    def exists(self, node_id: NodeID) -> bool: ...

    def exists_check(self, node_id: NodeID) -> None: ...

    def has_children(self, node_id: NodeID) -> bool: ...

    def get_children(self, node_id: NodeID) -> list[NodeID]: ...

    def get_roots(self) -> list[NodeID]: ...

    def list_nodes(self) -> list[Node]: ...

    def close(self) -> None: ...


def open_store(settings: Optional[Settings] = None) -> GraphStore:
    """Open the backend named by ``settings.backend`` inside the workspace.

    Raises:
        ValueError: If the backend name is unknown.
    """
    settings = settings or default_settings
    if settings.backend not in BACKENDS:
        raise ValueError(
            f"Unknown backend {settings.backend!r}. Use: {' | '.join(BACKENDS)}"
        )

    settings.ensure_workspace()
    logger.info("Opening %s store in %s", settings.backend, settings.workspace_dir)
    if settings.backend == "json":
        return SnapshotGraph.load(settings.snapshot_path)
    return SqliteStore.open(settings.db_path)


def save_store(store: GraphStore, settings: Optional[Settings] = None) -> None:
    """Persist ``store`` if it is memory-resident; SQLite writes are already durable."""
    settings = settings or default_settings
    if isinstance(store, SnapshotGraph):
        store.save(settings.snapshot_path)
