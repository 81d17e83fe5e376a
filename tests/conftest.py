"""Shared fixtures.

``store`` is parametrised over both backends so every contract test runs
against the SQLite store and the JSON snapshot alike.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Callable, Generator

import pytest

from taskgraph.db.store import SqliteStore
from taskgraph.models import Node
from taskgraph.snapshot import SnapshotGraph
from taskgraph.store import GraphStore


@pytest.fixture(params=["sqlite", "json"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> Generator[GraphStore, None, None]:
    """A fresh, empty store of each backend kind."""
    if request.param == "sqlite":
        s: GraphStore = SqliteStore.open(tmp_path / "graph.sqlite3")
    else:
        s = SnapshotGraph.load(tmp_path / "graph.json")
    yield s
    s.close()


@pytest.fixture()
def make_node(store: GraphStore) -> Callable[..., Node]:
    """Add a node to ``store``; pass ``n=`` for a predictable UUID(int=n)."""

    def _make(title: str = "", n: int | None = None, **fields) -> Node:
        if n is not None:
            fields["id"] = uuid.UUID(int=n)
        node = Node(title=title, **fields)
        store.add(node)
        return node

    return _make
