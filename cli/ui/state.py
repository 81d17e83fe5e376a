"""Mode state machine for the terminal UI.

The UI is always in exactly one mode.  Each mode holds only the data it needs:

- :class:`ListMode` — browsing the task tree; holds the selected row.
- :class:`EditMode` — editing a *copy* of one node; holds the copy and the
  field being typed into.  The copy is only written back by an explicit
  ``store.update`` when the user saves.
- :class:`FindMode` — the jump-to dialog; holds the query and its candidates.

:func:`handle_key` is the single entry point: it routes a key to the current
mode's transition function and installs the mode that function returns.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from cli.rendering import rank_candidates
from cli.ui.text import handle_input_multi_line, handle_input_single_line
from taskgraph.models import Node
from taskgraph.search import find_candidates
from taskgraph.store import GraphStore
from taskgraph.traversal import walk

logger = logging.getLogger(__name__)


class EditField(enum.Enum):
    TITLE = "title"
    DESCRIPTION = "description"

    def next(self) -> EditField:
        if self is EditField.TITLE:
            return EditField.DESCRIPTION
        return EditField.TITLE


@dataclass
class ListMode:
    selected: int = 0


@dataclass
class EditMode:
    node: Node
    target: EditField = EditField.TITLE


@dataclass
class FindMode:
    query: str = ""
    candidates: List[Tuple[Node, int]] = field(default_factory=list)
    selected: int = 0


Mode = Union[ListMode, EditMode, FindMode]


@dataclass
class AppState:
    store: GraphStore
    rows: List[Tuple[Node, int]] = field(default_factory=list)
    mode: Mode = field(default_factory=ListMode)
    running: bool = True
    status: str = ""

    @classmethod
    def load(cls, store: GraphStore) -> AppState:
        state = cls(store=store)
        state.refresh()
        return state

    def refresh(self) -> None:
        """Re-read the task tree from the store."""
        self.rows = [(self.store.get(node_id), depth) for node_id, depth in walk(self.store)]

    def selected_node(self) -> Optional[Node]:
        if isinstance(self.mode, EditMode):
            return self.mode.node
        if isinstance(self.mode, ListMode) and self.rows:
            return self.rows[self.mode.selected][0]
        return None

    def row_index(self, node: Node) -> int:
        for i, (row_node, _) in enumerate(self.rows):
            if row_node.id == node.id:
                return i
        return 0


def _clamp(index: int, length: int) -> int:
    if length == 0:
        return 0
    return max(0, min(index, length - 1))


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def list_transition(state: AppState, mode: ListMode, key: str) -> Mode:
    if key in ("q", "esc"):
        state.running = False
        return mode
    if key in ("down", "j"):
        return ListMode(_clamp(mode.selected + 1, len(state.rows)))
    if key in ("up", "k"):
        return ListMode(_clamp(mode.selected - 1, len(state.rows)))
    if key in ("enter", "e") and state.rows:
        node = state.rows[mode.selected][0]
        return EditMode(dataclasses.replace(node))
    if key == "a":
        node = Node.new()
        state.store.add(node)
        state.refresh()
        state.status = "Added node"
        return EditMode(dataclasses.replace(node))
    if key == "/":
        return FindMode()
    if key == "r":
        state.refresh()
        return ListMode(_clamp(mode.selected, len(state.rows)))
    return mode


def edit_transition(state: AppState, mode: EditMode, key: str) -> Mode:
    if key == "tab":
        return EditMode(mode.node, mode.target.next())
    if key == "esc":
        state.status = "Discarded changes"
        return ListMode(state.row_index(mode.node))
    if key == "save":
        state.store.update(mode.node)
        state.refresh()
        state.status = f"Saved {mode.node.short_repr()}"
        return ListMode(state.row_index(mode.node))

    if mode.target is EditField.TITLE:
        mode.node.title = handle_input_single_line(mode.node.title, key)
    else:
        mode.node.description = handle_input_multi_line(mode.node.description, key)
    return mode


def find_transition(state: AppState, mode: FindMode, key: str) -> Mode:
    if key == "esc":
        return ListMode()
    if key == "down":
        return FindMode(mode.query, mode.candidates, _clamp(mode.selected + 1, len(mode.candidates)))
    if key == "up":
        return FindMode(mode.query, mode.candidates, _clamp(mode.selected - 1, len(mode.candidates)))
    if key == "enter":
        if not mode.candidates:
            return mode
        node = mode.candidates[mode.selected][0]
        return ListMode(state.row_index(node))

    query = handle_input_single_line(mode.query, key)
    if query == mode.query:
        return mode
    return FindMode(query, rank_candidates(find_candidates(state.store, query)), 0)


def handle_key(state: AppState, key: str) -> None:
    """Apply one key press to ``state``."""
    mode = state.mode
    if isinstance(mode, ListMode):
        state.mode = list_transition(state, mode, key)
    elif isinstance(mode, EditMode):
        state.mode = edit_transition(state, mode, key)
    elif isinstance(mode, FindMode):
        state.mode = find_transition(state, mode, key)
    logger.debug("key=%r mode=%s", key, type(state.mode).__name__)
