"""Treating links and component blocks as atomic regions of a line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from journal_editor.buffer.state import CursorPosition, EditorState
from journal_editor.markup.components import Component, serialize_block
from journal_editor.markup.segments import inline_block_segments


@dataclass(frozen=True, slots=True)
class InlineBlockRange:
    line: int
    start_col: int
    end_col: int


def _blocks(lines: Sequence[str], line: int):
    if line < 0 or line >= len(lines) or not lines[line]:
        return []
    return inline_block_segments(lines[line])


def get_inline_block_at(
    lines: Sequence[str], line: int, col: int
) -> Optional[InlineBlockRange]:
    """The block strictly containing ``col``; its edges do not count."""

    for seg in _blocks(lines, line):
        if seg.start_col < col < seg.end_col:
            return InlineBlockRange(line, seg.start_col, seg.end_col)
    return None


def get_inline_block_ending_before(
    lines: Sequence[str], line: int, col: int
) -> Optional[InlineBlockRange]:
    for seg in _blocks(lines, line):
        if seg.end_col == col:
            return InlineBlockRange(line, seg.start_col, seg.end_col)
    return None


def get_inline_block_starting_after(
    lines: Sequence[str], line: int, col: int
) -> Optional[InlineBlockRange]:
    for seg in _blocks(lines, line):
        if seg.start_col == col:
            return InlineBlockRange(line, seg.start_col, seg.end_col)
    return None


def snap_cursor_out_of_block(
    state: EditorState, previous: CursorPosition, *, from_click: bool = False
) -> EditorState:
    """Push a cursor that landed inside a block to the edge it was heading for.

    Moving forward (right or down relative to ``previous``) lands on the
    block end; moving backward, or any click, lands on the block start.
    """

    cursor = state.cursor
    block = get_inline_block_at(state.lines, cursor.line, cursor.col)
    if block is None:
        return state
    moving_forward = previous < cursor
    col = block.end_col if moving_forward and not from_click else block.start_col
    return EditorState(state.lines, CursorPosition(cursor.line, col), state.selection_anchor)


def replace_block(
    state: EditorState, line: int, start_col: int, end_col: int, component: Component
) -> EditorState:
    """Swap the raw block text for the serialization of ``component``."""

    text = state.lines[line]
    return state.with_line(
        line,
        text[:start_col] + serialize_block(component) + text[end_col:],
        state.cursor,
        state.selection_anchor,
    )


def delete_block(
    state: EditorState, line: int, start_col: int, end_col: int
) -> EditorState:
    text = state.lines[line]
    return state.with_line(
        line, text[:start_col] + text[end_col:], CursorPosition(line, start_col)
    )


__all__ = [
    "InlineBlockRange",
    "delete_block",
    "get_inline_block_at",
    "get_inline_block_ending_before",
    "get_inline_block_starting_after",
    "replace_block",
    "snap_cursor_out_of_block",
]
