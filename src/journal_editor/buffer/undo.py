"""Bounded undo/redo stacks of editor snapshots."""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from .state import EditorState

MAX_HISTORY = 500


def same_content(a: EditorState, b: EditorState) -> bool:
    """Snapshots are interchangeable when their lines match; cursors are ignored."""

    return a is b or a.lines == b.lines


class UndoHistory:
    """Linear history with FIFO eviction once ``capacity`` is reached.

    The history never decides *what* to record: callers push the state they
    want to return to before applying a content edit. Pushing a snapshot
    whose lines equal the newest undo entry is ignored, and every push
    invalidates the redo future.
    """

    def __init__(self, capacity: int = MAX_HISTORY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._undo: Deque[EditorState] = deque(maxlen=capacity)
        self._redo: Deque[EditorState] = deque(maxlen=capacity)

    @property
    def last_pushed(self) -> Optional[EditorState]:
        return self._undo[-1] if self._undo else None

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def __len__(self) -> int:
        return len(self._undo)

    def push_state(self, state: EditorState) -> bool:
        """Record ``state``; returns ``False`` when it duplicated the newest entry."""

        self._redo.clear()
        last = self.last_pushed
        if last is not None and same_content(last, state):
            return False
        self._undo.append(state)
        return True

    def undo(self, current: EditorState) -> Optional[EditorState]:
        """Step back from ``current``; ``None`` means the host keeps its state."""

        return _step(self._undo, self._redo, current)

    def redo(self, current: EditorState) -> Optional[EditorState]:
        return _step(self._redo, self._undo, current)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()


def _step(
    source: Deque[EditorState], target: Deque[EditorState], current: EditorState
) -> Optional[EditorState]:
    # Entries equal to the current content would make the step a visible no-op.
    while source and same_content(source[-1], current):
        source.pop()
    if not source:
        return None
    previous = source.pop()
    target.append(current)
    return previous


__all__ = ["MAX_HISTORY", "UndoHistory", "same_content"]
