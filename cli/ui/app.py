"""Curses front end for the terminal UI.

Left pane: the task tree.  Right pane: the selected node (title on top,
description below).  ``/`` opens the find dialog along the bottom.

Keys in the tree: ``j``/``k`` or arrows move, ``Enter``/``e`` edit, ``a`` add,
``/`` find, ``r`` reload, ``q``/``Esc`` quit.  While editing: ``Tab`` switches
field, ``Ctrl-S``/``F2`` saves, ``Esc`` discards.
"""

from __future__ import annotations

import curses
import logging
from typing import Optional

from cli.rendering import INDENT, render_candidates
from cli.ui.state import AppState, EditField, EditMode, FindMode, ListMode, handle_key
from cli.ui.text import cursor_offset
from taskgraph.store import GraphStore

logger = logging.getLogger(__name__)

_NAMED_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_BACKSPACE: "backspace",
    curses.KEY_ENTER: "enter",
    curses.KEY_F2: "save",
    9: "tab",
    10: "enter",
    13: "enter",
    19: "save",  # Ctrl-S
    27: "esc",
    127: "backspace",
    8: "backspace",
}


def key_name(key: object) -> Optional[str]:
    """Translate a ``get_wch()`` result into the key names the state machine uses."""
    if isinstance(key, str):
        if len(key) == 1 and ord(key) < 256 and ord(key) in _NAMED_KEYS:
            return _NAMED_KEYS[ord(key)]
        return key
    if isinstance(key, int):
        return _NAMED_KEYS.get(key)
    return None


def _addstr(win: "curses.window", y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = win.getmaxyx()
    if 0 <= y < height and x < width:
        win.addnstr(y, x, text, max(0, width - x - 1), attr)


def _draw_tree(win: "curses.window", state: AppState) -> None:
    win.erase()
    win.box()
    _addstr(win, 0, 2, " Nodes ")
    selected = state.mode.selected if isinstance(state.mode, ListMode) else -1
    height = win.getmaxyx()[0] - 2
    top = max(0, selected - height + 1)
    for row, (node, depth) in enumerate(state.rows[top:top + height]):
        index = top + row
        marker = ">>" if index == selected else "  "
        attr = curses.A_REVERSE if index == selected else 0
        _addstr(win, row + 1, 1, f"{marker}{INDENT * depth}{node.title or '(untitled)'}", attr)
    win.noutrefresh()


def _draw_node(win: "curses.window", state: AppState) -> None:
    win.erase()
    width = win.getmaxyx()[1]
    node = state.selected_node()
    title, description = ("N/A", "No node selected") if node is None else (node.title, node.description)

    win.hline(2, 0, curses.ACS_HLINE, width)
    _addstr(win, 0, 0, " Title ")
    _addstr(win, 1, 1, title)
    _addstr(win, 3, 0, " Description ")
    for i, line in enumerate(description.split("\n")):
        _addstr(win, 4 + i, 1, line)
    win.noutrefresh()


def _draw_find(win: "curses.window", mode: FindMode) -> None:
    win.erase()
    win.box()
    _addstr(win, 0, 2, " Find ")
    _addstr(win, 1, 1, f"/{mode.query}")
    for i, line in enumerate(render_candidates(mode.candidates)[: win.getmaxyx()[0] - 3]):
        attr = curses.A_REVERSE if i == mode.selected else 0
        _addstr(win, 2 + i, 1, line, attr)
    win.noutrefresh()


def _place_cursor(stdscr: "curses.window", state: AppState, node_x: int, find_y: int) -> None:
    mode = state.mode
    if isinstance(mode, EditMode):
        if mode.target is EditField.TITLE:
            x, y = cursor_offset(mode.node.title)
            stdscr.move(1 + y, node_x + x)
        else:
            x, y = cursor_offset(mode.node.description)
            stdscr.move(4 + y, node_x + x)
        curses.curs_set(1)
    elif isinstance(mode, FindMode):
        x, _ = cursor_offset(mode.query)
        stdscr.move(find_y + 1, 1 + x)
        curses.curs_set(1)
    else:
        curses.curs_set(0)


def _loop(stdscr: "curses.window", state: AppState) -> None:
    stdscr.keypad(True)
    while state.running:
        height, width = stdscr.getmaxyx()
        half = width // 2
        find_height = min(8, height // 3)

        stdscr.erase()
        stdscr.noutrefresh()
        _draw_tree(stdscr.derwin(height - 1, half, 0, 0), state)
        _draw_node(stdscr.derwin(height - 1, width - half, 0, half), state)
        if isinstance(state.mode, FindMode):
            _draw_find(stdscr.derwin(find_height, width, height - 1 - find_height, 0), state.mode)
        _addstr(stdscr, height - 1, 0, state.status)
        try:
            _place_cursor(stdscr, state, half, height - 1 - find_height)
        except curses.error:
            curses.curs_set(0)
        curses.doupdate()

        try:
            key = key_name(stdscr.get_wch())
        except curses.error:
            continue
        if key is None:
            continue
        state.status = ""
        handle_key(state, key)


def run(store: GraphStore) -> None:
    """Run the terminal UI until the user quits."""
    state = AppState.load(store)
    logger.info("Starting UI with %d row(s)", len(state.rows))
    curses.wrapper(_loop, state)
