"""Snapshot types exchanged with host front-ends."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Protocol, Tuple

from .state import CursorPosition, Lines


@dataclass(slots=True)
class EditorMirror:
    """Host-friendly view of one session: text, caret, selection and folds."""

    lines: Lines
    cursor: CursorPosition
    selection_anchor: Optional[CursorPosition]
    cursor_visible: bool = True
    hidden_lines: FrozenSet[int] = frozenset()
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def selection(self) -> Optional[Tuple[CursorPosition, CursorPosition]]:
        if self.selection_anchor is None or self.selection_anchor == self.cursor:
            return None
        return self.selection_anchor, self.cursor


class EditorSync(Protocol):
    """How adapters exchange snapshots with a session."""

    def pull_mirror(self) -> EditorMirror:
        """Return the latest snapshot the host should render."""
        ...

    def push_host_text(self, text: str) -> None:
        """Submit text produced outside the keymap (IME commit, paste)."""
        ...


__all__ = ["EditorMirror", "EditorSync"]
