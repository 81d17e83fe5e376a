"""Utilities for rendering the task graph in the CLI."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from taskgraph.models import Node, NodeID
from taskgraph.store import GraphStore
from taskgraph.traversal import leaves, walk

INDENT = "  "


def render_tree(store: GraphStore, roots: Optional[Iterable[NodeID]] = None) -> List[str]:
    """Render every node reachable from ``roots`` indented by its depth.

    Args:
        store: Graph store to read from.
        roots: Start nodes.  Every root of the graph when omitted.

    Returns:
        One line per visited node, in traversal order.
    """
    lines = []
    for node_id, depth in walk(store, roots):
        lines.append(f"{INDENT * depth}{store.get(node_id).short_repr()}")
    return lines


def render_leaves(store: GraphStore, roots: Optional[Iterable[NodeID]] = None) -> List[str]:
    """Render the actionable tasks: visited nodes with no children."""
    return [store.get(node_id).short_repr() for node_id in leaves(store, roots)]


def rank_candidates(candidates: Iterable[Tuple[Node, int]]) -> List[Tuple[Node, int]]:
    """Order search results closest first, ties broken by title."""
    return sorted(candidates, key=lambda c: (c[1], c[0].title, c[0].id))


def render_candidates(candidates: Iterable[Tuple[Node, int]]) -> List[str]:
    return [f"{node.title} {node.id}" for node, _ in rank_candidates(candidates)]
