"""Content-changing buffer operations: deletion, insertion and bullets.

Every function takes an ``EditorState`` and returns a new one. Operations
that find nothing to do return the state they were given, so callers can
detect a no-op with ``is``.
"""

from __future__ import annotations

import re

from journal_editor.buffer.selection import has_selection, selection_bounds
from journal_editor.buffer.state import CursorPosition, EditorState
from journal_editor.markup.markdown import get_bullet_info

MAX_BULLET_INDENT = 5
BULLET_STUB_PATTERN = re.compile(r"^(\t*)-$")


def delete_selection(state: EditorState) -> EditorState:
    """Collapse the selected range onto its start line."""

    anchor = state.selection_anchor
    if anchor is None:
        return state
    bounds = selection_bounds(state)
    if bounds is None:
        return EditorState(state.lines, state.cursor, None)
    start, end = bounds.start, bounds.end
    joined = state.lines[start.line][: start.col] + state.lines[end.line][end.col :]
    return state.splice(start.line, end.line + 1, (joined,), start)


def _without_selection(state: EditorState) -> EditorState:
    return delete_selection(state) if has_selection(state) else state


def backspace(state: EditorState) -> EditorState:
    if has_selection(state):
        return delete_selection(state)

    line, col = state.cursor.line, state.cursor.col
    text = state.lines[line]
    bullet = get_bullet_info(text)
    if bullet is not None and 0 < col <= bullet.prefix_length:
        return state.with_line(line, text[bullet.prefix_length :], CursorPosition(line, 0))
    if col > 0:
        return state.with_line(
            line, text[: col - 1] + text[col:], CursorPosition(line, col - 1)
        )
    if line > 0:
        previous = state.lines[line - 1]
        return state.splice(
            line - 1, line + 1, (previous + text,), CursorPosition(line - 1, len(previous))
        )
    return state


def delete_forward(state: EditorState) -> EditorState:
    if has_selection(state):
        return delete_selection(state)

    line, col = state.cursor.line, state.cursor.col
    text = state.lines[line]
    if col < len(text):
        return state.with_line(line, text[:col] + text[col + 1 :], state.cursor)
    if line < state.line_count - 1:
        return state.splice(line, line + 2, (text + state.lines[line + 1],), state.cursor)
    return state


def insert_character(state: EditorState, char: str) -> EditorState:
    working = _without_selection(state)
    line, col = working.cursor.line, working.cursor.col
    text = working.lines[line]
    return working.with_line(
        line, text[:col] + char + text[col:], CursorPosition(line, col + len(char))
    )


def insert_tab(state: EditorState) -> EditorState:
    return insert_character(state, "\t")


def insert_newline(state: EditorState) -> EditorState:
    """Split the line; bullet lines continue the list or exit it when empty."""

    working = _without_selection(state)
    line, col = working.cursor.line, working.cursor.col
    text = working.lines[line]

    bullet = get_bullet_info(text)
    if bullet is not None:
        prefix = text[: bullet.prefix_length]
        if not text[bullet.prefix_length :].strip():
            return working.with_line(line, "", CursorPosition(line, 0))
        if col >= bullet.prefix_length:
            return working.splice(
                line,
                line + 1,
                (text[:col], prefix + text[col:]),
                CursorPosition(line + 1, len(prefix)),
            )

    return working.splice(
        line, line + 1, (text[:col], text[col:]), CursorPosition(line + 1, 0)
    )


def insert_space(state: EditorState, max_indent: int = MAX_BULLET_INDENT) -> EditorState:
    """Type a space, expanding a ``\\t*-`` stub into a bullet prefix."""

    if not has_selection(state):
        line, col = state.cursor.line, state.cursor.col
        text = state.lines[line]
        match = BULLET_STUB_PATTERN.match(text)
        if match is not None and col == len(text):
            level = min(max(len(match.group(1)), 1), max_indent)
            prefix = "\t" * level + "- "
            return state.with_line(line, prefix, CursorPosition(line, len(prefix)))
    return insert_character(state, " ")


def indent_line(state: EditorState, max_indent: int = MAX_BULLET_INDENT) -> EditorState:
    """Indent a bullet one level; past the cap (or off a bullet) insert a tab."""

    line = state.cursor.line
    text = state.lines[line]
    bullet = get_bullet_info(text)
    if bullet is None or bullet.indent_level >= max_indent or has_selection(state):
        return insert_tab(state)
    cursor = CursorPosition(line, state.cursor.col + 1)
    return state.with_line(line, "\t" + text, cursor)


def outdent_line(state: EditorState) -> EditorState:
    line = state.cursor.line
    text = state.lines[line]
    bullet = get_bullet_info(text)
    if bullet is None or bullet.indent_level <= 1:
        return state
    cursor = CursorPosition(line, max(state.cursor.col - 1, 0))
    anchor = state.selection_anchor
    if anchor is not None and anchor.line == line:
        anchor = CursorPosition(line, max(anchor.col - 1, 0))
    return state.with_line(line, text[1:], cursor, anchor)


def insert_text(state: EditorState, text: str) -> EditorState:
    """Paste ``text``; embedded newlines become new buffer lines."""

    working = _without_selection(state)
    line, col = working.cursor.line, working.cursor.col
    current = working.lines[line]
    before, after = current[:col], current[col:]

    pieces = text.split("\n")
    if len(pieces) == 1:
        return working.with_line(
            line, before + text + after, CursorPosition(line, col + len(text))
        )
    new_lines = [before + pieces[0], *pieces[1:-1], pieces[-1] + after]
    cursor = CursorPosition(line + len(pieces) - 1, len(pieces[-1]))
    return working.splice(line, line + 1, new_lines, cursor)


__all__ = [
    "MAX_BULLET_INDENT",
    "backspace",
    "delete_forward",
    "delete_selection",
    "indent_line",
    "insert_character",
    "insert_newline",
    "insert_space",
    "insert_tab",
    "insert_text",
    "outdent_line",
]
