"""Text-entry helpers for the terminal UI.

Keys are plain strings: a single printable character, or one of the names
produced by :func:`cli.ui.app.key_name` (``"enter"``, ``"backspace"``, ...).
"""

from __future__ import annotations

from typing import Tuple


def is_printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def handle_input_single_line(target: str, key: str) -> str:
    """Apply ``key`` to a one-line field and return the new text."""
    if is_printable(key):
        return target + key
    if key == "backspace":
        return target[:-1]
    return target


def handle_input_multi_line(target: str, key: str) -> str:
    """Like :func:`handle_input_single_line`, but Enter inserts a newline."""
    if key == "enter":
        return target + "\n"
    return handle_input_single_line(target, key)


def cursor_offset(target: str) -> Tuple[int, int]:
    """Return the ``(x, y)`` cell just after the last character of ``target``.

    ``x`` counts characters, not bytes, and is offset by one so the cursor
    falls after the text.  Wrapped lines are not accounted for.
    """
    lines = target.split("\n")
    x = 1 + len(lines[-1])
    y = len(lines) - 1
    return x, y
