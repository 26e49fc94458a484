"""Stateful editing session: one document, its history and key dispatch.

The session is the only place where pure ``EditorState`` transitions meet
mutable state. Two update paths exist:

* ``apply(op)`` for cursor and selection changes, never recorded;
* ``edit(label, op)`` for content changes, which snapshots the pre-edit
  state into the undo history when the lines actually change.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Optional

from journal_editor.actions import blocks, editing, formatting, macros, movement, search
from journal_editor.buffer.document import (
    Document,
    PathLike,
    create_document,
    has_frontmatter,
    parse_document,
    update_modified,
)
from journal_editor.buffer.selection import (
    get_selected_text,
    get_selection_line_range,
    has_selection,
)
from journal_editor.buffer.state import CursorPosition, EditorState
from journal_editor.buffer.store import JournalStore
from journal_editor.buffer.sync import EditorMirror
from journal_editor.buffer.undo import UndoHistory, same_content
from journal_editor.keymaps import KeyChord, KeymapRegistry, load_default_keymaps
from journal_editor.markup.columns import click_to_raw_col, get_word_bounds_at
from journal_editor.markup.components import Component
from journal_editor.markup.folding import get_collapsed_hidden_lines, get_hidden_lines
from journal_editor.markup.markdown import (
    collapsed_heading_indices,
    get_bullet_info,
    is_heading_line,
)
from journal_editor.runtime import telemetry
from journal_editor.runtime.config import EditorConfig

StateOp = Callable[[EditorState], EditorState]
Clock = Callable[[], datetime]

_LOGGER = "journal_editor.session"


class UnknownActionError(KeyError):
    """Raised when dispatching an action id the registry does not know."""

    def __init__(self, action_id: str) -> None:
        super().__init__(f"Unknown action '{action_id}'")
        self.action_id = action_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EditorSession:
    """Owns the active ``Document``, an ``UndoHistory`` and the caret flag."""

    def __init__(
        self,
        document: Optional[Document] = None,
        *,
        config: Optional[EditorConfig] = None,
        registry: Optional[KeymapRegistry] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self._clock = clock or _utcnow
        self.document = document or create_document(now=self._clock())
        self.history = UndoHistory(self.config.history_limit)
        self.cursor_visible = True
        self.dirty = False
        if registry is None:
            registry = KeymapRegistry(logger_name="journal_editor.keymaps")
            load_default_keymaps(registry)
        self.registry = registry

    @property
    def state(self) -> EditorState:
        return self.document.editor

    def _set_state(self, state: EditorState) -> None:
        self.document = self.document.with_editor(state)
        self.cursor_visible = True

    # Update paths -------------------------------------------------------

    def apply(self, op: StateOp) -> EditorState:
        """Run a cursor/selection operation without touching history."""

        after = op(self.state)
        if after is not self.state:
            self._set_state(after)
        return self.state

    def edit(self, label: str, op: StateOp) -> EditorState:
        """Run a content operation, recording the pre-edit state for undo."""

        before = self.state
        with telemetry.span(
            f"session::{label}",
            logger_name=_LOGGER,
            metadata={"line": before.cursor.line, "col": before.cursor.col},
        ) as handle:
            after = op(before)
            if after is before:
                handle.add_metadata("changed", False)
                return before
            if not same_content(before, after):
                self.history.push_state(before)
                self.dirty = True
            handle.add_metadata("lines", after.line_count)
            self._set_state(after)
            return after

    def undo(self) -> bool:
        previous = self.history.undo(self.state)
        if previous is None:
            telemetry.record_event("session.undo_empty", level="debug", logger_name=_LOGGER)
            return False
        self._set_state(previous)
        self.dirty = True
        telemetry.record_event(
            "session.undo", data={"remaining": len(self.history)}, logger_name=_LOGGER
        )
        return True

    def redo(self) -> bool:
        following = self.history.redo(self.state)
        if following is None:
            telemetry.record_event("session.redo_empty", level="debug", logger_name=_LOGGER)
            return False
        self._set_state(following)
        self.dirty = True
        telemetry.record_event("session.redo", logger_name=_LOGGER)
        return True

    # Clipboard ----------------------------------------------------------

    def copy(self) -> str:
        return get_selected_text(self.state)

    def cut(self) -> str:
        text = self.copy()
        if text:
            self.edit("cut", editing.delete_selection)
        return text

    def paste(self, text: str) -> EditorState:
        return self.edit("paste", lambda s: editing.insert_text(s, text))

    # Documents ----------------------------------------------------------

    def load(self, document: Document) -> None:
        self.document = document
        self.history.clear()
        self.dirty = False
        self.cursor_visible = True
        telemetry.record_event(
            "session.load",
            data={"id": document.metadata.id, "lines": document.editor.line_count},
            logger_name=_LOGGER,
        )

    def load_text(self, content: str, filepath: Optional[PathLike] = None) -> Document:
        """Parse serialized text (with or without frontmatter) and load it."""

        if not has_frontmatter(content):
            telemetry.record_event(
                "document.frontmatter_missing",
                level="debug",
                data={"path": str(filepath) if filepath is not None else ""},
                logger_name=_LOGGER,
            )
        self.load(parse_document(content, filepath, self._clock()))
        return self.document

    def new_document(self) -> Document:
        self.load(create_document(now=self._clock()))
        return self.document

    def save(self, store: Optional[JournalStore] = None) -> Path:
        """Persist through ``store`` and adopt the refreshed ``modified`` stamp.

        Without a store the entry goes under ``config.journal_dir``.
        """

        if store is None:
            store = JournalStore(self.config.journal_dir)
        now = self._clock()
        path = store.save(self.document, now)
        self.document = update_modified(self.document, now)
        self.dirty = False
        return path

    # Views --------------------------------------------------------------

    def toggle_cursor_visible(self) -> bool:
        self.cursor_visible = not self.cursor_visible
        return self.cursor_visible

    def hidden_lines(self) -> frozenset[int]:
        state = self.state
        focus = get_hidden_lines(
            state, state.cursor.line, get_selection_line_range(state)
        )
        collapsed = get_collapsed_hidden_lines(
            state.lines, collapsed_heading_indices(state.lines)
        )
        return (focus | collapsed) - {state.cursor.line}

    def mirror(self) -> EditorMirror:
        state = self.state
        return EditorMirror(
            lines=state.lines,
            cursor=state.cursor,
            selection_anchor=state.selection_anchor,
            cursor_visible=self.cursor_visible,
            hidden_lines=self.hidden_lines(),
            attributes={"id": self.document.metadata.id, "dirty": str(self.dirty).lower()},
        )

    def context(self) -> Dict[str, bool]:
        """Flags consulted by ``when`` clauses on key bindings."""

        state = self.state
        line = state.current_line
        return {
            "has_selection": has_selection(state),
            "bullet_line": get_bullet_info(line) is not None,
            "heading_line": is_heading_line(line),
            "macro_input": macros.get_current_macro_input(
                state.lines, state.cursor.line, state.cursor.col
            )
            is not None,
            "can_undo": self.history.can_undo(),
            "can_redo": self.history.can_redo(),
        }

    # Dispatch -----------------------------------------------------------

    def dispatch(self, action_id: str) -> object:
        if not self.registry.has_action(action_id):
            raise UnknownActionError(action_id)
        action = self.registry.get_action(action_id)
        telemetry.record_event(
            "session.dispatch",
            level="debug",
            data={"action": action.id, "category": action.category},
            logger_name=_LOGGER,
        )
        return action(self)

    def handle_chord(self, chord: KeyChord | str) -> bool:
        match = self.registry.resolve(chord, self.context())
        if match is None:
            return False
        self.dispatch(match.action.id)
        return True

    # Movement -----------------------------------------------------------

    def move(self, op: StateOp) -> EditorState:
        """Apply a cursor motion, stepping over links and component blocks."""

        return self.apply(lambda s: blocks.snap_cursor_out_of_block(op(s), s.cursor))

    def click(self, line: int, display_col: int) -> EditorState:
        def place(state: EditorState) -> EditorState:
            raw = self._raw_col(state, line, display_col)
            target = movement.set_cursor(state, CursorPosition(line, raw))
            return blocks.snap_cursor_out_of_block(target, state.cursor, from_click=True)

        return self.apply(place)

    def drag_to(self, line: int, display_col: int, anchor: CursorPosition) -> EditorState:
        def extend(state: EditorState) -> EditorState:
            raw = self._raw_col(state, line, display_col)
            return movement.set_cursor_with_anchor(
                state, CursorPosition(line, raw), anchor
            )

        return self.apply(extend)

    def double_click(self, line: int, display_col: int) -> EditorState:
        def select_word(state: EditorState) -> EditorState:
            if line < 0 or line >= state.line_count:
                return state
            raw = self._raw_col(state, line, display_col)
            bounds = get_word_bounds_at(state.lines[line], raw)
            if bounds is None:
                return movement.set_cursor(state, CursorPosition(line, raw))
            return movement.select_range(state, line, bounds.start, bounds.end)

        return self.apply(select_word)

    @staticmethod
    def _raw_col(state: EditorState, line: int, display_col: int) -> int:
        if line < 0 or line >= state.line_count:
            return display_col
        return click_to_raw_col(
            state.lines[line], display_col, line == state.cursor.line
        )

    # Key chains ---------------------------------------------------------

    def type_text(self, text: str) -> EditorState:
        return self.edit("insert_character", lambda s: editing.insert_character(s, text))

    def _expand_macro(self, state: EditorState) -> EditorState:
        return macros.apply_macro(state, now=self._clock())

    def press_space(self) -> EditorState:
        def chain(state: EditorState) -> EditorState:
            expanded = self._expand_macro(state)
            if expanded is not state:
                return editing.insert_character(expanded, " ")
            typed = editing.insert_space(state, self.config.max_bullet_indent)
            linked = formatting.try_format_url_before_space(typed)
            return linked if linked is not None else typed

        return self.edit("space", chain)

    def press_enter(self) -> EditorState:
        def chain(state: EditorState) -> EditorState:
            expanded = self._expand_macro(state)
            if expanded is not state:
                return expanded
            working = editing.delete_selection(state) if has_selection(state) else state
            typed = editing.insert_newline(working)
            if typed.line_count <= working.line_count:
                return typed
            linked = formatting.try_format_url_before_newline(typed)
            return linked if linked is not None else typed

        return self.edit("newline", chain)

    def press_tab(self) -> EditorState:
        def chain(state: EditorState) -> EditorState:
            expanded = self._expand_macro(state)
            if expanded is not state:
                return expanded
            return editing.indent_line(state, self.config.max_bullet_indent)

        return self.edit("tab", chain)

    def press_shift_tab(self) -> EditorState:
        return self.edit("outdent", editing.outdent_line)

    def press_backspace(self) -> EditorState:
        def chain(state: EditorState) -> EditorState:
            if not has_selection(state):
                block = blocks.get_inline_block_ending_before(
                    state.lines, state.cursor.line, state.cursor.col
                )
                if block is not None:
                    return blocks.delete_block(
                        state, block.line, block.start_col, block.end_col
                    )
            return editing.backspace(state)

        return self.edit("backspace", chain)

    def press_delete(self) -> EditorState:
        def chain(state: EditorState) -> EditorState:
            if not has_selection(state):
                block = blocks.get_inline_block_starting_after(
                    state.lines, state.cursor.line, state.cursor.col
                )
                if block is not None:
                    return blocks.delete_block(
                        state, block.line, block.start_col, block.end_col
                    )
            return editing.delete_forward(state)

        return self.edit("delete", chain)

    # Structured edits ---------------------------------------------------

    def accept_macro(self, macro: macros.Macro) -> EditorState:
        state = self.state
        typed = macros.get_current_macro_input(
            state.lines, state.cursor.line, state.cursor.col
        )
        if typed is None:
            return state
        return self.edit(
            "accept_macro",
            lambda s: macros.accept_macro(s, macro, len(typed), now=self._clock()),
        )

    def macro_suggestions(self) -> list[macros.Macro]:
        state = self.state
        typed = macros.get_current_macro_input(
            state.lines, state.cursor.line, state.cursor.col
        )
        if typed is None:
            return []
        return macros.get_matching_macros(typed, self.config.macro_suggestion_limit)

    def update_block(
        self, line: int, start_col: int, end_col: int, component: Component
    ) -> EditorState:
        return self.edit(
            "replace_block",
            lambda s: blocks.replace_block(s, line, start_col, end_col, component),
        )

    def delete_block(self, line: int, start_col: int, end_col: int) -> EditorState:
        return self.edit(
            "delete_block", lambda s: blocks.delete_block(s, line, start_col, end_col)
        )

    def replace_match(self, match: search.SearchMatch, replacement: str) -> EditorState:
        return self.edit(
            "replace_match", lambda s: search.replace_match(s, match, replacement)
        )

    def replace_all(self, query: str, replacement: str) -> EditorState:
        return self.edit(
            "replace_all", lambda s: search.replace_all(s, query, replacement)
        )


__all__ = ["EditorSession", "UnknownActionError"]
