"""Pydantic documents for the on-disk snapshot and the editor round-trip.

Timestamps are stored as integer seconds since the epoch (or ``null``) and
identifiers as canonical UUID strings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from taskgraph.errors import MalformedDataError
from taskgraph.models import Node, from_seconds, parse_node_id, to_seconds


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------

class NodeDocument(BaseModel):
    id: str
    title: str = ""
    description: str = ""
    scheduled: Optional[int] = None
    due: Optional[int] = None

    @classmethod
    def from_node(cls, node: Node) -> NodeDocument:
        return cls(
            id=str(node.id),
            title=node.title,
            description=node.description,
            scheduled=to_seconds(node.scheduled),
            due=to_seconds(node.due),
        )

    def to_node(self) -> Node:
        return Node(
            id=parse_node_id(self.id),
            title=self.title,
            description=self.description,
            scheduled=from_seconds(self.scheduled),
            due=from_seconds(self.due),
        )


class SnapshotDocument(BaseModel):
    nodes: dict[str, NodeDocument] = Field(default_factory=dict)
    roots: list[str] = Field(default_factory=list)
    edges: dict[str, list[str]] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_node_document(text: str) -> Node:
    """Parse one JSON node document (as written for the editor)."""
    try:
        doc = NodeDocument.model_validate_json(text)
    except ValidationError as exc:
        raise MalformedDataError(f"Invalid node document: {exc}") from exc
    return doc.to_node()


def dump_node_document(node: Node) -> str:
    return NodeDocument.from_node(node).model_dump_json(indent=2)


def parse_snapshot_document(text: str) -> SnapshotDocument:
    try:
        return SnapshotDocument.model_validate_json(text)
    except ValidationError as exc:
        raise MalformedDataError(f"Invalid snapshot document: {exc}") from exc
