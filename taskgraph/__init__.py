"""taskgraph: a personal task tracker built on a directed graph of tasks.

Public re-exports so callers can write::

    from taskgraph import Node, open_store, start_traversal, find_candidates
"""

from taskgraph.errors import (
    MalformedDataError,
    NodeNotFoundError,
    StorageError,
    TaskGraphError,
)
from taskgraph.models import Edge, Node, NodeID
from taskgraph.search import edit_distance, find_candidates
from taskgraph.store import GraphStore, open_store, save_store
from taskgraph.traversal import Traversal, leaves, start_traversal, walk

__all__ = [
    "Edge",
    "GraphStore",
    "MalformedDataError",
    "Node",
    "NodeID",
    "NodeNotFoundError",
    "StorageError",
    "TaskGraphError",
    "Traversal",
    "edit_distance",
    "find_candidates",
    "leaves",
    "open_store",
    "save_store",
    "start_traversal",
    "walk",
]
