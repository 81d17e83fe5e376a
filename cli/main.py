"""taskgraph CLI — entry-point for all task graph operations.

Usage:
    python cli/main.py --help

Commands:
    add       create a task
    connect   make one task a subtask of another
    edit      edit a task in $EDITOR
    show      print the task tree
    next      print the actionable (childless) tasks
    find      jump to a task by approximate title
    roots     list top-level tasks
    ui        browse and edit in the terminal UI
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from taskgraph.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import contextlib
import logging
import uuid
from datetime import datetime
from typing import Iterator, List, Optional

import typer

from taskgraph.config import BACKENDS, settings
from taskgraph.errors import TaskGraphError
from taskgraph.logging_setup import setup_logging
from taskgraph.models import Node
from taskgraph.schemas import dump_node_document
from taskgraph.search import find_candidates
from taskgraph.store import GraphStore, open_store, save_store

from cli.editor import edit_node
from cli.rendering import render_candidates, render_leaves, render_tree

logger = logging.getLogger(__name__)

DATETIME_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d"]

app = typer.Typer(
    name="taskgraph",
    help="Track tasks as a graph of subtasks.",
    no_args_is_help=True,
)


@app.callback()
def main(
    backend: Optional[str] = typer.Option(
        None, "--backend", help=f"Storage backend: {' | '.join(BACKENDS)}."
    ),
    workspace: Optional[Path] = typer.Option(
        None, "--workspace", help="Directory holding the graph files."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    """Track tasks as a graph of subtasks."""
    if backend is not None:
        settings.backend = backend
    if workspace is not None:
        settings.workspace_dir = workspace
    setup_logging("DEBUG" if verbose else settings.log_level)


@contextlib.contextmanager
def _graph(save: bool = False) -> Iterator[GraphStore]:
    """Open the configured store, report failures, and persist on success."""
    try:
        store = open_store(settings)
    except (TaskGraphError, ValueError) as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    try:
        yield store
        if save:
            save_store(store, settings)
    except TaskGraphError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)
    finally:
        store.close()


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------
@app.command("add")
def add(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Task title."),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Task description."
    ),
    scheduled: Optional[datetime] = typer.Option(
        None, "--scheduled", "-s", formats=DATETIME_FORMATS, help="When to start (UTC)."
    ),
    due: Optional[datetime] = typer.Option(
        None, "--due", "-e", formats=DATETIME_FORMATS, help="Deadline (UTC)."
    ),
) -> None:
    """Create a new task and print its ID."""
    node = Node.new(
        title=title or "",
        description=description or "",
        scheduled=scheduled,
        due=due,
    )
    with _graph(save=True) as store:
        store.add(node)
    typer.echo(str(node.id))
    typer.echo(dump_node_document(node))


@app.command("connect")
def connect(
    from_id: uuid.UUID = typer.Argument(..., metavar="FROM", help="Parent task ID."),
    to_id: uuid.UUID = typer.Argument(..., metavar="TO", help="Subtask ID."),
) -> None:
    """Make TO a subtask of FROM."""
    with _graph(save=True) as store:
        store.connect(from_id, to_id)
        typer.echo(f"Connected: {store.get(from_id).short_repr()} -> {store.get(to_id).short_repr()}")


@app.command("edit")
def edit(
    node_id: uuid.UUID = typer.Argument(..., metavar="NODE", help="Task ID."),
) -> None:
    """Edit a task as JSON in $EDITOR."""
    with _graph(save=True) as store:
        node = edit_node(store, node_id)
        if node is None:
            typer.echo("Editor failed; task unchanged.")
            return
        typer.echo(f"Updated: {node.short_repr()}")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def _start_nodes(root: Optional[uuid.UUID]) -> Optional[List[uuid.UUID]]:
    return None if root is None else [root]


@app.command("show")
def show(
    root: Optional[uuid.UUID] = typer.Option(None, "--root", "-r", help="Start from this task."),
) -> None:
    """Print the task tree, indented by depth."""
    with _graph() as store:
        for line in render_tree(store, _start_nodes(root)):
            typer.echo(line)


@app.command("next")
def next_(
    root: Optional[uuid.UUID] = typer.Option(None, "--root", "-r", help="Start from this task."),
) -> None:
    """Print the tasks that have no subtasks left."""
    with _graph() as store:
        for line in render_leaves(store, _start_nodes(root)):
            typer.echo(line)


@app.command("find")
def find(
    text: str = typer.Argument(..., help="Text to match against task titles."),
) -> None:
    """List tasks whose title approximately matches TEXT."""
    with _graph() as store:
        candidates = find_candidates(store, text)
    if not candidates:
        typer.echo(f"No tasks match {text!r}.")
        return
    for line in render_candidates(candidates):
        typer.echo(line)


@app.command("roots")
def roots() -> None:
    """List the top-level tasks."""
    with _graph() as store:
        for root_id in store.get_roots():
            typer.echo(store.get(root_id).short_repr())


@app.command("ui")
def ui() -> None:
    """Browse and edit the task graph in the terminal."""
    from cli.ui.app import run

    with _graph(save=True) as store:
        run(store)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
