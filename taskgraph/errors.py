"""Exception types raised by the graph store, traversal and search layers."""

from __future__ import annotations

from typing import Any


class TaskGraphError(Exception):
    """Base class for every error taskgraph raises on purpose."""


class NodeNotFoundError(TaskGraphError, LookupError):
    """A node referenced by ID does not exist in the store."""

    def __init__(self, node_id: Any) -> None:
        super().__init__(f"Missing node {node_id}")
        self.node_id = node_id


class StorageError(TaskGraphError):
    """The underlying file or database could not be read or written."""


class MalformedDataError(TaskGraphError, ValueError):
    """A stored identifier, timestamp or document could not be parsed."""
