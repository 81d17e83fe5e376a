"""Depth-first traversal over the parent -> child relation.

A :class:`Traversal` yields ``(node_id, depth)`` pairs, ``depth`` being the
number of edges from the start node along the path the node was discovered
on.  A ``seen`` set stops already visited nodes from being expanded or yielded
again, so every reachable node is visited exactly once and the walk
terminates on cyclic graphs too.

Children come back from ``get_children`` in ascending ID order and are pushed
onto a LIFO stack, so siblings are visited in *descending* ID order::

    traversal = start_traversal(store, root_id)
    while (item := traversal.step()) is not None:
        node_id, depth = item

Each traversal is a single pass; start a new one to walk the graph again.
Mutating the graph while a traversal is in progress gives unspecified (but
safe) results.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from taskgraph.models import NodeID
from taskgraph.store import GraphStore


class Traversal:
    def __init__(self, store: GraphStore, root: NodeID) -> None:
        store.exists_check(root)
        self._store = store
        self._seen: set[NodeID] = set()
        self._stack: list[tuple[NodeID, int]] = [(root, 0)]

    def step(self) -> Optional[tuple[NodeID, int]]:
        """Return the next ``(node_id, depth)`` pair, or ``None`` when finished."""
        while self._stack:
            node_id, depth = self._stack.pop()
            # A node can be pushed by two parents before either copy is popped.
            if node_id in self._seen:
                continue
            self._seen.add(node_id)
            for child in self._store.get_children(node_id):
                if child in self._seen:
                    continue
                self._stack.append((child, depth + 1))
            return node_id, depth
        return None

    def __iter__(self) -> Iterator[tuple[NodeID, int]]:
        return self

    def __next__(self) -> tuple[NodeID, int]:
        item = self.step()
        if item is None:
            raise StopIteration
        return item


def start_traversal(store: GraphStore, root: NodeID) -> Traversal:
    """Begin a depth-first walk from ``root``.

    Raises:
        NodeNotFoundError: If ``root`` does not exist.
    """
    return Traversal(store, root)


def walk(
    store: GraphStore, roots: Optional[Iterable[NodeID]] = None
) -> Iterator[tuple[NodeID, int]]:
    """Chain traversals over ``roots`` (every root node when omitted)."""
    if roots is None:
        roots = store.get_roots()
    for root in roots:
        yield from start_traversal(store, root)


def leaves(
    store: GraphStore, roots: Optional[Iterable[NodeID]] = None
) -> Iterator[NodeID]:
    """Yield the visited nodes that have no children: the next actionable tasks."""
    for node_id, _ in walk(store, roots):
        if not store.has_children(node_id):
            yield node_id
