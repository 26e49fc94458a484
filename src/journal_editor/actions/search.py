"""Case-insensitive find and replace over raw buffer text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence

from journal_editor.buffer.state import CursorPosition, EditorState


@dataclass(frozen=True, slots=True)
class SearchMatch:
    line: int
    start_col: int
    end_col: int


def _pattern(query: str) -> "re.Pattern[str]":
    return re.compile(re.escape(query), re.IGNORECASE)


def find_all_matches(lines: Sequence[str], query: str) -> List[SearchMatch]:
    """Every match in document order; matches may overlap."""

    if not query:
        return []
    pattern = _pattern(query)
    matches: List[SearchMatch] = []
    for index, line in enumerate(lines):
        found = pattern.search(line)
        while found is not None:
            matches.append(SearchMatch(index, found.start(), found.end()))
            found = pattern.search(line, found.start() + 1)
    return matches


def replace_match(
    state: EditorState, match: SearchMatch, replacement: str
) -> EditorState:
    text = state.lines[match.line]
    updated = text[: match.start_col] + replacement + text[match.end_col :]
    cursor = CursorPosition(match.line, match.start_col + len(replacement))
    return state.with_line(match.line, updated, cursor)


def replace_all(state: EditorState, query: str, replacement: str) -> EditorState:
    """Replace non-overlapping matches left to right on every line."""

    if not query:
        return state
    pattern = _pattern(query)
    # A callable replacement keeps backslashes in ``replacement`` literal.
    lines = tuple(pattern.sub(lambda _: replacement, line) for line in state.lines)
    if lines == state.lines:
        return state
    return EditorState(lines, state.cursor, None)


def select_match(state: EditorState, match: SearchMatch) -> EditorState:
    return EditorState(
        state.lines,
        CursorPosition(match.line, match.end_col),
        CursorPosition(match.line, match.start_col),
    )


__all__ = [
    "SearchMatch",
    "find_all_matches",
    "replace_all",
    "replace_match",
    "select_match",
]
