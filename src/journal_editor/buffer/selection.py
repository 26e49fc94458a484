"""Ordering and bounds helpers over cursor positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .state import CursorPosition, EditorState


def pos_equal(a: CursorPosition, b: CursorPosition) -> bool:
    return a.line == b.line and a.col == b.col


def pos_before(a: CursorPosition, b: CursorPosition) -> bool:
    return a.line < b.line or (a.line == b.line and a.col < b.col)


@dataclass(frozen=True, slots=True)
class SelectionBounds:
    """A selection normalised to document order."""

    start: CursorPosition
    end: CursorPosition

    @property
    def is_multiline(self) -> bool:
        return self.start.line != self.end.line


def get_selection_bounds(
    anchor: CursorPosition, focus: CursorPosition
) -> SelectionBounds:
    """Order ``anchor`` and ``focus``; symmetric in its arguments."""

    if pos_before(focus, anchor):
        return SelectionBounds(start=focus, end=anchor)
    return SelectionBounds(start=anchor, end=focus)


def has_selection(state: EditorState) -> bool:
    anchor = state.selection_anchor
    return anchor is not None and not pos_equal(anchor, state.cursor)


def selection_bounds(state: EditorState) -> Optional[SelectionBounds]:
    """Bounds of the active selection, or ``None`` when nothing is selected."""

    if not has_selection(state):
        return None
    assert state.selection_anchor is not None
    return get_selection_bounds(state.selection_anchor, state.cursor)


def get_selection_line_range(state: EditorState) -> Optional[Tuple[int, int]]:
    bounds = selection_bounds(state)
    if bounds is None:
        return None
    return bounds.start.line, bounds.end.line


def get_selected_text(state: EditorState) -> str:
    bounds = selection_bounds(state)
    if bounds is None:
        return ""
    start, end = bounds.start, bounds.end
    lines = state.lines
    if start.line == end.line:
        return lines[start.line][start.col : end.col]
    parts = [lines[start.line][start.col :]]
    parts.extend(lines[start.line + 1 : end.line])
    parts.append(lines[end.line][: end.col])
    return "\n".join(parts)


__all__ = [
    "SelectionBounds",
    "get_selected_text",
    "get_selection_bounds",
    "get_selection_line_range",
    "has_selection",
    "pos_before",
    "pos_equal",
    "selection_bounds",
]
