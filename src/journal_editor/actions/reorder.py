"""Moving lines and whole heading sections past their neighbours."""

from __future__ import annotations

from typing import AbstractSet, Optional, Tuple

from journal_editor.buffer.selection import get_selection_line_range
from journal_editor.buffer.state import CursorPosition, EditorState, Lines
from journal_editor.markup.folding import get_hidden_lines


def _swap(state: EditorState, upper: int) -> Lines:
    lines = list(state.lines)
    lines[upper], lines[upper + 1] = lines[upper + 1], lines[upper]
    return tuple(lines)


def swap_line_up(state: EditorState) -> EditorState:
    line = state.cursor.line
    if line == 0:
        return state
    lines = _swap(state, line - 1)
    return EditorState(lines, CursorPosition(line - 1, state.cursor.col), None)


def swap_line_down(state: EditorState) -> EditorState:
    line = state.cursor.line
    if line >= state.line_count - 1:
        return state
    lines = _swap(state, line)
    return EditorState(lines, CursorPosition(line + 1, state.cursor.col), None)


def _block_range(state: EditorState, hidden: AbstractSet[int]) -> Tuple[int, int]:
    """Lines that travel together: cursor line or selection plus trailing folds."""

    line_range = get_selection_line_range(state)
    start, end = line_range if line_range is not None else (state.cursor.line,) * 2
    while end + 1 < state.line_count and end + 1 in hidden:
        end += 1
    return start, end


def _resolve_hidden(
    state: EditorState, hidden_lines: Optional[AbstractSet[int]]
) -> AbstractSet[int]:
    if hidden_lines is not None:
        return hidden_lines
    return get_hidden_lines(state, state.cursor.line, get_selection_line_range(state))


def _shift(pos: Optional[CursorPosition], offset: int) -> Optional[CursorPosition]:
    if pos is None:
        return None
    return CursorPosition(pos.line + offset, pos.col)


def _exchange(
    state: EditorState, block: Tuple[int, int], neighbour: Tuple[int, int], upward: bool
) -> EditorState:
    lines = state.lines
    block_lines = lines[block[0] : block[1] + 1]
    neighbour_lines = lines[neighbour[0] : neighbour[1] + 1]
    if upward:
        start, end = neighbour[0], block[1]
        moved = block_lines + neighbour_lines
        offset = -len(neighbour_lines)
    else:
        start, end = block[0], neighbour[1]
        moved = neighbour_lines + block_lines
        offset = len(neighbour_lines)
    return state.splice(
        start,
        end + 1,
        moved,
        _shift(state.cursor, offset),  # type: ignore[arg-type]
        _shift(state.selection_anchor, offset),
    )


def swap_heading_section_up(
    state: EditorState, hidden_lines: Optional[AbstractSet[int]] = None
) -> EditorState:
    """Move the current section (or selected block) above the previous one.

    ``hidden_lines`` is the folded set the host is showing; when omitted it is
    derived from the cursor and selection. A line that heads no folded
    content simply swaps with the visible line above it.
    """

    hidden = _resolve_hidden(state, hidden_lines)
    block = _block_range(state, hidden)
    above = block[0] - 1
    while above >= 0 and above in hidden:
        above -= 1
    if above < 0:
        return state
    return _exchange(state, block, (above, block[0] - 1), upward=True)


def swap_heading_section_down(
    state: EditorState, hidden_lines: Optional[AbstractSet[int]] = None
) -> EditorState:
    hidden = _resolve_hidden(state, hidden_lines)
    block = _block_range(state, hidden)
    below = block[1] + 1
    if below >= state.line_count:
        return state
    end = below
    while end + 1 < state.line_count and end + 1 in hidden:
        end += 1
    return _exchange(state, block, (below, end), upward=False)


__all__ = [
    "swap_heading_section_down",
    "swap_heading_section_up",
    "swap_line_down",
    "swap_line_up",
]
