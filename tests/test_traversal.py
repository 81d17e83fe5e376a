"""Traversal engine tests (both backends)."""

from __future__ import annotations

import uuid

import pytest

from taskgraph.errors import NodeNotFoundError
from taskgraph.store import GraphStore
from taskgraph.traversal import leaves, start_traversal, walk


def _titles(store: GraphStore, pairs) -> list[tuple[str, int]]:
    return [(store.get(node_id).title, depth) for node_id, depth in pairs]


class TestTraversal:
    def test_unknown_root_raises(self, store: GraphStore) -> None:
        with pytest.raises(NodeNotFoundError):
            start_traversal(store, uuid.uuid4())

    def test_single_node(self, store: GraphStore, make_node) -> None:
        a = make_node("A")
        traversal = start_traversal(store, a.id)
        assert traversal.step() == (a.id, 0)
        assert traversal.step() is None
        assert traversal.step() is None

    def test_chain_depths(self, store: GraphStore, make_node) -> None:
        a, b, c = make_node("A"), make_node("B"), make_node("C")
        store.connect(a.id, b.id)
        store.connect(b.id, c.id)
        assert _titles(store, start_traversal(store, a.id)) == [("A", 0), ("B", 1), ("C", 2)]

    def test_siblings_visited_in_descending_id_order(self, store: GraphStore, make_node) -> None:
        root = make_node("R", n=100)
        for n in (2, 1, 3):
            store.connect(root.id, make_node(f"C{n}", n=n).id)
        grandchild = make_node("G", n=50)
        store.connect(uuid.UUID(int=1), grandchild.id)

        assert _titles(store, start_traversal(store, root.id)) == [
            ("R", 0),
            ("C3", 1),
            ("C2", 1),
            ("C1", 1),
            ("G", 2),
        ]

    def test_cycle_terminates_and_visits_each_once(self, store: GraphStore, make_node) -> None:
        a, b = make_node("A"), make_node("B")
        store.connect(a.id, b.id)
        store.connect(b.id, a.id)

        visited = list(start_traversal(store, a.id))
        assert visited == [(a.id, 0), (b.id, 1)]

    def test_node_pushed_twice_is_yielded_once(self, store: GraphStore, make_node) -> None:
        # A -> B, A -> C, C -> B: B is pushed by A and again by C.
        a = make_node("A", n=10)
        b = make_node("B", n=1)
        c = make_node("C", n=2)
        store.connect(a.id, b.id)
        store.connect(a.id, c.id)
        store.connect(c.id, b.id)

        assert _titles(store, start_traversal(store, a.id)) == [("A", 0), ("C", 1), ("B", 2)]

    def test_traversal_is_single_pass(self, store: GraphStore, make_node) -> None:
        a = make_node("A")
        traversal = start_traversal(store, a.id)
        assert list(traversal) == [(a.id, 0)]
        assert list(traversal) == []
        assert list(start_traversal(store, a.id)) == [(a.id, 0)]


class TestConsumers:
    def test_walk_defaults_to_all_roots(self, store: GraphStore, make_node) -> None:
        a = make_node("A", n=1)
        b = make_node("B", n=2)
        child = make_node("child", n=3)
        store.connect(b.id, child.id)

        assert _titles(store, walk(store)) == [("A", 0), ("B", 0), ("child", 1)]

    def test_walk_from_given_root(self, store: GraphStore, make_node) -> None:
        make_node("A", n=1)
        b = make_node("B", n=2)
        assert _titles(store, walk(store, [b.id])) == [("B", 0)]

    def test_leaves_are_childless_nodes(self, store: GraphStore, make_node) -> None:
        project = make_node("Project", n=1)
        step1 = make_node("Step 1", n=2)
        step2 = make_node("Step 2", n=3)
        sub = make_node("Sub-step", n=4)
        for child in (step1, step2):
            store.connect(project.id, child.id)
        store.connect(step1.id, sub.id)

        assert {store.get(n).title for n in leaves(store)} == {"Step 2", "Sub-step"}
