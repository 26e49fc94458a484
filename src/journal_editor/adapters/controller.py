"""Host adapter that wires an ``EditorSession`` into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from journal_editor.buffer.sync import EditorMirror
from journal_editor.keymaps import KeyChord
from journal_editor.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HostHooks:
    """Callbacks invoked by the adapter to update host widgets."""

    update_buffer: Callable[[EditorMirror], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class KeyHostAdapter:
    """Bridges host key and pointer events to an ``EditorSession``.

    Implements the ``EditorSync`` protocol so hosts can pull snapshots and
    push text that bypasses the keymap (IME commits, clipboard pastes).
    """

    def __init__(self, session: EditorSession, hooks: HostHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._refresh_buffer()

    def handle_key(self, key: str, *, character: Optional[str] = None) -> bool:
        """Resolve ``key`` through the keymap; unbound printables insert text."""

        self._log_state("key ->", key=key, character=character)
        chord = KeyChord.parse(key)
        match = self.session.registry.resolve(chord, self.session.context())
        if match is not None:
            self.session.dispatch(match.action.id)
            consumed = True
            status = match.binding.action_id
        elif character is not None and len(character) == 1 and character.isprintable():
            self.session.type_text(character)
            consumed = True
            status = ""
        else:
            consumed = False
            status = ""
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()
        self._log_state("result <-", consumed=consumed, action=status or None)
        return consumed

    def handle_click(self, line: int, display_col: int, *, count: int = 1) -> None:
        if count >= 2:
            self.session.double_click(line, display_col)
        else:
            self.session.click(line, display_col)
        self._log_state("click ->", line=line, col=display_col, count=count)
        self._refresh_buffer()

    def handle_drag(self, line: int, display_col: int) -> None:
        state = self.session.state
        anchor = state.selection_anchor or state.cursor
        self.session.drag_to(line, display_col, anchor)
        self._refresh_buffer()

    def blink(self) -> bool:
        """Flip caret visibility; hosts call this every ``cursor_blink_ms``."""

        visible = self.session.toggle_cursor_visible()
        self._refresh_buffer()
        return visible

    def pull_mirror(self) -> EditorMirror:
        return self.session.mirror()

    def push_host_text(self, text: str) -> None:
        self.session.paste(text)
        self._log_state("paste ->", chars=len(text))
        self._refresh_buffer()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.session.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.session.state
        return {
            "cursor": (state.cursor.line, state.cursor.col),
            "anchor": (
                (state.selection_anchor.line, state.selection_anchor.col)
                if state.selection_anchor is not None
                else None
            ),
            "lines": state.line_count,
            "undo": len(self.session.history),
        }


__all__ = ["HostHooks", "KeyHostAdapter"]
