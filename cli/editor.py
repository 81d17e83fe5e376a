"""External editor integration for the taskgraph CLI.

Handles opening a node in the user's preferred editor ($EDITOR) and syncing
changes back to the store.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from taskgraph.config import settings
from taskgraph.errors import MalformedDataError
from taskgraph.models import Node, NodeID
from taskgraph.schemas import dump_node_document, parse_node_document
from taskgraph.store import GraphStore

logger = logging.getLogger(__name__)


def get_editor_command() -> str:
    """Determine the editor command to use."""
    # 1. Explicit setting (TASKGRAPH_EDITOR)
    if settings.editor:
        return settings.editor

    # 2. Environment variable
    if "EDITOR" in os.environ:
        return os.environ["EDITOR"]

    # 3. Platform defaults
    if os.name == "nt":  # Windows
        if shutil.which("code"):
            return "code -w"
        return "notepad"
    else:  # Unix
        if shutil.which("vim"):
            return "vim"
        if shutil.which("nano"):
            return "nano"
        return "vi"


def _open_editor(path: Path) -> int:
    """Run the editor on ``path`` and return its exit code."""
    editor = get_editor_command()
    cmd = f"{editor} \"{path}\""
    logger.debug("Launching editor: %s", cmd)
    # Shell=True to handle spaces in command (e.g. "code -w")
    return subprocess.call(cmd, shell=True)


def edit_node(store: GraphStore, node_id: NodeID) -> Optional[Node]:
    """Open a node as JSON in an external editor and save the changes.

    Returns the updated node, or ``None`` if the editor exited with an error
    (the store is left untouched in that case).

    Raises:
        NodeNotFoundError: If ``node_id`` does not exist.
        MalformedDataError: If the edited document is invalid or its ID changed.
    """
    node = store.get(node_id)

    with tempfile.TemporaryDirectory(prefix="taskgraph-") as tmp:
        draft_file = Path(tmp) / f"{node.id}.json"
        draft_file.write_text(dump_node_document(node), encoding="utf-8")

        ret = _open_editor(draft_file)
        if ret != 0:
            logger.warning("Editor exited with code %d; node %s unchanged", ret, node.id)
            return None

        edited = parse_node_document(draft_file.read_text(encoding="utf-8"))

    if edited.id != node.id:
        raise MalformedDataError(
            f"Node ID cannot be changed while editing ({node.id} -> {edited.id})"
        )

    store.update(edited)
    return edited
