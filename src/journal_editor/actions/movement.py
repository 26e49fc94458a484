"""Cursor movement and selection placement."""

from __future__ import annotations

from typing import Callable, Optional

from journal_editor.buffer.selection import selection_bounds
from journal_editor.buffer.state import CursorPosition, EditorState, clamp_position

Target = Callable[[EditorState], CursorPosition]


def _move(
    state: EditorState,
    target: Target,
    extend: bool,
    collapse_to: Optional[str] = None,
) -> EditorState:
    """Move the cursor to ``target(state)``.

    With ``extend`` the anchor is pinned at the old cursor (when absent) and
    only the cursor travels. Without it, an active selection collapses to
    ``collapse_to`` ("start" or "end") instead of taking a step.
    """

    if extend:
        anchor = state.selection_anchor or state.cursor
        return EditorState(state.lines, target(state), anchor)
    bounds = selection_bounds(state)
    if bounds is not None and collapse_to is not None:
        edge = bounds.start if collapse_to == "start" else bounds.end
        return EditorState(state.lines, edge, None)
    return EditorState(state.lines, target(state), None)


def _left(state: EditorState) -> CursorPosition:
    line, col = state.cursor.line, state.cursor.col
    if col > 0:
        return CursorPosition(line, col - 1)
    if line > 0:
        return CursorPosition(line - 1, len(state.lines[line - 1]))
    return state.cursor


def _right(state: EditorState) -> CursorPosition:
    line, col = state.cursor.line, state.cursor.col
    if col < len(state.lines[line]):
        return CursorPosition(line, col + 1)
    if line < state.line_count - 1:
        return CursorPosition(line + 1, 0)
    return state.cursor


def _up(state: EditorState) -> CursorPosition:
    line, col = state.cursor.line, state.cursor.col
    if line == 0:
        return CursorPosition(0, 0)
    return CursorPosition(line - 1, min(col, len(state.lines[line - 1])))


def _down(state: EditorState) -> CursorPosition:
    line, col = state.cursor.line, state.cursor.col
    last = state.line_count - 1
    if line >= last:
        return CursorPosition(last, len(state.lines[last]))
    return CursorPosition(line + 1, min(col, len(state.lines[line + 1])))


def move_cursor_left(state: EditorState, extend: bool = False) -> EditorState:
    return _move(state, _left, extend, "start")


def move_cursor_right(state: EditorState, extend: bool = False) -> EditorState:
    return _move(state, _right, extend, "end")


def move_cursor_up(state: EditorState, extend: bool = False) -> EditorState:
    return _move(state, _up, extend, "start")


def move_cursor_down(state: EditorState, extend: bool = False) -> EditorState:
    return _move(state, _down, extend, "end")


def move_cursor_to_line_start(state: EditorState, extend: bool = False) -> EditorState:
    return _move(state, lambda s: CursorPosition(s.cursor.line, 0), extend)


def move_cursor_to_line_end(state: EditorState, extend: bool = False) -> EditorState:
    return _move(
        state, lambda s: CursorPosition(s.cursor.line, len(s.current_line)), extend
    )


def move_cursor_to_doc_start(state: EditorState, extend: bool = False) -> EditorState:
    return _move(
        state, lambda s: clamp_position(s.lines, CursorPosition(0, s.cursor.col)), extend
    )


def move_cursor_to_doc_end(state: EditorState, extend: bool = False) -> EditorState:
    return _move(
        state,
        lambda s: clamp_position(s.lines, CursorPosition(s.line_count - 1, s.cursor.col)),
        extend,
    )


def set_cursor(state: EditorState, pos: CursorPosition) -> EditorState:
    """Place the cursor (clamped) and drop any selection."""

    return EditorState(state.lines, pos, None)


def set_cursor_with_anchor(
    state: EditorState, cursor: CursorPosition, anchor: CursorPosition
) -> EditorState:
    return EditorState(state.lines, cursor, anchor)


def select_all(state: EditorState) -> EditorState:
    last = state.line_count - 1
    return EditorState(
        state.lines, CursorPosition(last, len(state.lines[last])), CursorPosition(0, 0)
    )


def select_range(
    state: EditorState, line: int, start_col: int, end_col: int
) -> EditorState:
    """Select ``[start_col, end_col)`` on ``line``; anchor at the start."""

    return EditorState(
        state.lines, CursorPosition(line, end_col), CursorPosition(line, start_col)
    )


__all__ = [
    "move_cursor_down",
    "move_cursor_left",
    "move_cursor_right",
    "move_cursor_to_doc_end",
    "move_cursor_to_doc_start",
    "move_cursor_to_line_end",
    "move_cursor_to_line_start",
    "move_cursor_up",
    "select_all",
    "select_range",
    "set_cursor",
    "set_cursor_with_anchor",
]
