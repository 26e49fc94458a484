"""Immutable editor state: line buffer, cursor and selection anchor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Tuple

Lines = Tuple[str, ...]


@dataclass(frozen=True, slots=True, order=True)
class CursorPosition:
    """A (line, col) pair. Ordering is line first, then column.

    ``col`` indexes Python code points of the line, not UTF-16 code units,
    so a character outside the BMP occupies one column. Hosts that count in
    UTF-16 convert at their own boundary.
    """

    line: int = 0
    col: int = 0


def clamp_position(lines: Sequence[str], pos: CursorPosition) -> CursorPosition:
    """Clamp ``pos`` into ``[0, len(lines) - 1]`` x ``[0, len(line)]``."""

    line = min(max(pos.line, 0), max(len(lines) - 1, 0))
    length = len(lines[line]) if lines else 0
    col = min(max(pos.col, 0), length)
    if line == pos.line and col == pos.col:
        return pos
    return CursorPosition(line, col)


@dataclass(frozen=True, slots=True)
class EditorState:
    """Snapshot of one document's buffer.

    ``lines`` always holds at least one element, and ``cursor`` and
    ``selection_anchor`` are clamped into the buffer on construction, so
    every operation can trust them without re-validating.
    """

    lines: Lines = ("",)
    cursor: CursorPosition = CursorPosition()
    selection_anchor: Optional[CursorPosition] = None

    def __post_init__(self) -> None:
        lines = tuple(self.lines) or ("",)
        object.__setattr__(self, "lines", lines)
        object.__setattr__(self, "cursor", clamp_position(lines, self.cursor))
        if self.selection_anchor is not None:
            object.__setattr__(
                self, "selection_anchor", clamp_position(lines, self.selection_anchor)
            )

    @classmethod
    def from_text(cls, text: str) -> "EditorState":
        return cls(lines=tuple(text.split("\n")))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.line]

    def evolve(self, **changes: object) -> "EditorState":
        return replace(self, **changes)  # type: ignore[arg-type]

    def splice(
        self,
        start: int,
        end: int,
        new_lines: Iterable[str],
        cursor: CursorPosition,
        selection_anchor: Optional[CursorPosition] = None,
    ) -> "EditorState":
        """Return a state with ``lines[start:end]`` replaced by ``new_lines``."""

        lines = list(self.lines)
        lines[start:end] = list(new_lines)
        return EditorState(tuple(lines), cursor, selection_anchor)

    def with_line(
        self,
        index: int,
        text: str,
        cursor: CursorPosition,
        selection_anchor: Optional[CursorPosition] = None,
    ) -> "EditorState":
        return self.splice(index, index + 1, (text,), cursor, selection_anchor)


def create_initial_state() -> EditorState:
    """An empty buffer: one blank line, cursor at the origin, no selection."""

    return EditorState()


__all__ = [
    "CursorPosition",
    "EditorState",
    "Lines",
    "clamp_position",
    "create_initial_state",
]
