"""Dataclass models for tasks and the edges between them.

These are plain Python objects – not ORM models.  Both storage backends
serialise / deserialise to and from these types.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from taskgraph.errors import MalformedDataError

NodeID = uuid.UUID


def _utc_seconds(value: Optional[datetime]) -> Optional[datetime]:
    """Normalise a timestamp to aware UTC with whole-second resolution.

    Naive datetimes are taken to already be in UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0)


@dataclass
class Node:
    id: NodeID = field(default_factory=uuid.uuid4)
    title: str = ""
    description: str = ""
    scheduled: Optional[datetime] = None
    due: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.scheduled = _utc_seconds(self.scheduled)
        self.due = _utc_seconds(self.due)

    @classmethod
    def new(cls, **fields: Any) -> Node:
        """Create a node with a fresh random ID and the given fields."""
        fields.pop("id", None)
        return cls(**fields)

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    def short_repr(self) -> str:
        return f"{self.title} ({self.id})"


@dataclass(frozen=True)
class Edge:
    from_id: NodeID
    to_id: NodeID


# ---------------------------------------------------------------------------
# Parsing helpers shared by the backends
# ---------------------------------------------------------------------------

def parse_node_id(value: Any) -> NodeID:
    """Parse a stored or user-supplied identifier into a :class:`uuid.UUID`.

    Raises:
        MalformedDataError: If ``value`` is not a valid UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise MalformedDataError(f"Invalid node ID {value!r}") from exc


def to_millis(value: Optional[datetime]) -> Optional[int]:
    """Convert a timestamp to whole-second UTC epoch milliseconds; naive means UTC."""
    value = _utc_seconds(value)
    if value is None:
        return None
    return int(value.timestamp()) * 1000


def from_millis(value: Optional[int]) -> Optional[datetime]:
    """Convert a millisecond epoch integer back into an aware UTC datetime."""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(microsecond=0)
    except (OverflowError, OSError, ValueError, TypeError) as exc:
        raise MalformedDataError(f"Couldn't parse datetime from timestamp {value!r}") from exc


def to_seconds(value: Optional[datetime]) -> Optional[int]:
    value = _utc_seconds(value)
    if value is None:
        return None
    return int(value.timestamp())


def from_seconds(value: Optional[int]) -> Optional[datetime]:
    """Convert a second epoch integer back into an aware UTC datetime."""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError, TypeError) as exc:
        raise MalformedDataError(f"Couldn't parse datetime from timestamp {value!r}") from exc
