"""Outline folding derived from heading markers in the buffer text.

Two independent sources hide lines:

* focus folding (``get_hidden_lines``) keeps the headings at or above the
  level the cursor (or selection) sits on and hides everything deeper;
* explicit collapse (``get_collapsed_hidden_lines``) hides the body of every
  heading carrying a ``^ `` marker.

Hosts union both sets before rendering. Collapse state is stored in the text
itself, so it survives serialization and undo.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

from journal_editor.buffer.state import CursorPosition, EditorState

from .markdown import (
    COLLAPSE_MARKER,
    collapse_marker_offset,
    get_heading_info,
    get_heading_level,
)

LineRange = Tuple[int, int]


def _reference_level(
    lines: Sequence[str], cursor_line: int, selection_range: Optional[LineRange]
) -> float:
    level = get_heading_level(lines[cursor_line])
    if level != math.inf or selection_range is None:
        return level
    start, end = selection_range
    return min(
        (get_heading_level(lines[i]) for i in range(start, end + 1)),
        default=math.inf,
    )


def get_hidden_lines(
    state: EditorState,
    cursor_line: int,
    selection_range: Optional[LineRange] = None,
) -> frozenset[int]:
    """Lines folded away while the cursor (or selection) sits at a heading level.

    The reference level is the cursor line's heading level, or, when the
    cursor is on body text, the shallowest heading inside ``selection_range``
    (inclusive line indices). Every line after the first heading at or above
    that level is hidden unless it is itself such a heading. The cursor line
    and selected lines are never hidden.
    """

    lines = state.lines
    last = len(lines) - 1
    cursor_line = min(max(cursor_line, 0), last)
    if selection_range is not None:
        start, end = sorted(selection_range)
        selection_range = (max(start, 0), min(end, last))

    reference = _reference_level(lines, cursor_line, selection_range)
    if reference == math.inf:
        return frozenset()

    visible = {cursor_line}
    if selection_range is not None:
        visible.update(range(selection_range[0], selection_range[1] + 1))

    first = next(
        (i for i, line in enumerate(lines) if get_heading_level(line) <= reference),
        None,
    )
    if first is None:
        return frozenset()

    return frozenset(
        i
        for i in range(first + 1, len(lines))
        if i not in visible and get_heading_level(lines[i]) > reference
    )


def get_collapsed_hidden_lines(
    lines: Sequence[str], collapsed_indices: Iterable[int]
) -> frozenset[int]:
    """Bodies of collapsed headings; indices that are not headings are ignored."""

    hidden: set[int] = set()
    for index in collapsed_indices:
        if index < 0 or index >= len(lines):
            continue
        info = get_heading_info(lines[index])
        if info is None:
            continue
        for follower in range(index + 1, len(lines)):
            if get_heading_level(lines[follower]) <= info.level:
                break
            hidden.add(follower)
    return frozenset(hidden)


def _shift_for_toggle(
    pos: Optional[CursorPosition], line: int, at: int, delta: int
) -> Optional[CursorPosition]:
    if pos is None or pos.line != line or pos.col < at:
        return pos
    if delta < 0:
        return CursorPosition(line, max(at, pos.col + delta))
    return CursorPosition(line, pos.col + delta)


def toggle_heading_collapse(state: EditorState, line_index: int) -> EditorState:
    """Insert or remove the ``^ `` marker on a heading (after any ``~S<n>~ ``)."""

    if line_index < 0 or line_index >= state.line_count:
        return state
    text = state.lines[line_index]
    info = get_heading_info(text)
    if info is None:
        return state

    at = collapse_marker_offset(text)
    if info.collapsed:
        updated = text[:at] + text[at + len(COLLAPSE_MARKER) :]
        delta = -len(COLLAPSE_MARKER)
    else:
        updated = text[:at] + COLLAPSE_MARKER + text[at:]
        delta = len(COLLAPSE_MARKER)

    cursor = _shift_for_toggle(state.cursor, line_index, at, delta)
    anchor = _shift_for_toggle(state.selection_anchor, line_index, at, delta)
    assert cursor is not None
    return state.with_line(line_index, updated, cursor, anchor)


__all__ = [
    "LineRange",
    "get_collapsed_hidden_lines",
    "get_hidden_lines",
    "toggle_heading_collapse",
]
