"""In-memory graph store persisted as a single JSON snapshot.

The whole graph is resident in memory.  ``load`` reads the snapshot file
(a missing file is an empty graph) and ``save`` replaces it atomically by
writing a temporary file next to it and renaming it over the original.

Unlike :class:`~taskgraph.db.store.SqliteStore`, the root set is kept as an
explicit field and updated by ``add`` and ``connect`` in the same call as the
structural change.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterator, Optional

from taskgraph.config import settings
from taskgraph.errors import MalformedDataError, NodeNotFoundError, StorageError
from taskgraph.models import Edge, Node, NodeID, parse_node_id
from taskgraph.schemas import NodeDocument, SnapshotDocument, parse_snapshot_document

logger = logging.getLogger(__name__)


class SnapshotGraph:
    def __init__(self) -> None:
        self._nodes: dict[NodeID, Node] = {}
        self._roots: set[NodeID] = set()
        self._edges: dict[NodeID, set[NodeID]] = {}

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, path: Optional[Path] = None) -> SnapshotGraph:
        """Load a graph from ``path`` (defaults to ``settings.snapshot_path``).

        Raises:
            StorageError: If the file exists but cannot be read.
            MalformedDataError: If the file is not a valid snapshot.
        """
        path = Path(path or settings.snapshot_path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No snapshot at %s; starting with an empty graph", path)
            return cls()
        except OSError as exc:
            raise StorageError(f"Couldn't read snapshot {path}: {exc}") from exc

        graph = cls.from_document(parse_snapshot_document(text))
        logger.info("Loaded snapshot %s nodes=%d", path, len(graph._nodes))
        return graph

    def save(self, path: Optional[Path] = None) -> None:
        """Write the graph to ``path``, replacing any previous snapshot."""
        path = Path(path or settings.snapshot_path)
        payload = self.to_document().model_dump_json()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Couldn't write snapshot {path}: {exc}") from exc
        logger.info("Saved snapshot %s nodes=%d", path, len(self._nodes))

    def close(self) -> None:
        """Nothing to release; the graph lives in memory until saved."""

    def to_document(self) -> SnapshotDocument:
        return SnapshotDocument(
            nodes={
                str(node_id): NodeDocument.from_node(node)
                for node_id, node in sorted(self._nodes.items())
            },
            roots=[str(node_id) for node_id in sorted(self._roots)],
            edges={
                str(node_id): [str(child) for child in sorted(children)]
                for node_id, children in sorted(self._edges.items())
            },
        )

    @classmethod
    def from_document(cls, doc: SnapshotDocument) -> SnapshotGraph:
        """Build a graph from a parsed document, checking referential integrity."""
        graph = cls()
        for key, node_doc in doc.nodes.items():
            node_id = parse_node_id(key)
            node = node_doc.to_node()
            if node.id != node_id:
                raise MalformedDataError(f"Node stored under {key} has ID {node.id}")
            graph._nodes[node_id] = node

        for edge in _document_edges(doc):
            for node_id in (edge.from_id, edge.to_id):
                if node_id not in graph._nodes:
                    raise MalformedDataError(f"Edge endpoint {node_id} is not a known node")
            graph._edges.setdefault(edge.from_id, set()).add(edge.to_id)

        targeted = {child for children in graph._edges.values() for child in children}
        roots = {parse_node_id(key) for key in doc.roots}
        expected = set(graph._nodes) - targeted
        if roots != expected:
            wrong = sorted(str(node_id) for node_id in roots ^ expected)
            raise MalformedDataError(f"Root set disagrees with edges for {', '.join(wrong)}")
        graph._roots = roots
        return graph

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, node: Node) -> None:
        if node.id in self._nodes:
            raise StorageError(f"Node {node.id} already exists")
        self._nodes[node.id] = dataclasses.replace(node)
        self._roots.add(node.id)
        logger.debug("Added node %s", node.id)

    def update(self, node: Node) -> None:
        self.exists_check(node.id)
        self._nodes[node.id] = dataclasses.replace(node)
        logger.debug("Updated node %s", node.id)

    def connect(self, from_id: NodeID, to_id: NodeID) -> None:
        self.exists_check(from_id)
        self.exists_check(to_id)

        self._edges.setdefault(from_id, set()).add(to_id)
        self._roots.discard(to_id)
        logger.debug("Connected %s -> %s", from_id, to_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, node_id: NodeID) -> Node:
        try:
            return dataclasses.replace(self._nodes[node_id])
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def exists(self, node_id: NodeID) -> bool:
        return node_id in self._nodes

    def exists_check(self, node_id: NodeID) -> None:
        if node_id not in self._nodes:
            raise NodeNotFoundError(node_id)

    def has_children(self, node_id: NodeID) -> bool:
        self.exists_check(node_id)
        return bool(self._edges.get(node_id))

    def get_children(self, node_id: NodeID) -> list[NodeID]:
        self.exists_check(node_id)
        return sorted(self._edges.get(node_id, ()))

    def get_roots(self) -> list[NodeID]:
        return sorted(self._roots)

    def list_nodes(self) -> list[Node]:
        return [dataclasses.replace(self._nodes[node_id]) for node_id in sorted(self._nodes)]


def _document_edges(doc: SnapshotDocument) -> Iterator[Edge]:
    for key, children in doc.edges.items():
        from_id = parse_node_id(key)
        for child in children:
            yield Edge(from_id, parse_node_id(child))
