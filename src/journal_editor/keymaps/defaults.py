"""Built-in actions and key bindings for the journal editor."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable, Iterable, Sequence

from journal_editor.actions import formatting, movement, reorder
from journal_editor.buffer.state import EditorState
from journal_editor.markup.folding import toggle_heading_collapse

from .models import ActionRef, Binding
from .registry import KeymapRegistry

if TYPE_CHECKING:
    from journal_editor.session import EditorSession


def _motion(op: Callable[..., EditorState], extend: bool) -> Callable[["EditorSession"], object]:
    def handler(session: "EditorSession") -> object:
        return session.move(partial(op, extend=extend))

    return handler


def _format(marker: str) -> Callable[["EditorSession"], object]:
    def handler(session: "EditorSession") -> object:
        return session.edit(
            "toggle_format", lambda s: formatting.toggle_inline_format(s, marker)
        )

    return handler


def _swap_section(op: Callable[..., EditorState]) -> Callable[["EditorSession"], object]:
    def handler(session: "EditorSession") -> object:
        hidden = session.hidden_lines()
        return session.edit("swap_section", lambda s: op(s, hidden))

    return handler


def _toggle_collapse(session: "EditorSession") -> object:
    return session.edit(
        "toggle_collapse", lambda s: toggle_heading_collapse(s, s.cursor.line)
    )


_MOTIONS = (
    ("left", movement.move_cursor_left, "Move left"),
    ("right", movement.move_cursor_right, "Move right"),
    ("up", movement.move_cursor_up, "Move up"),
    ("down", movement.move_cursor_down, "Move down"),
    ("line_start", movement.move_cursor_to_line_start, "Move to line start"),
    ("line_end", movement.move_cursor_to_line_end, "Move to line end"),
    ("doc_start", movement.move_cursor_to_doc_start, "Move to document start"),
    ("doc_end", movement.move_cursor_to_doc_end, "Move to document end"),
)

_MOTION_KEYS = {
    "left": "left",
    "right": "right",
    "up": "up",
    "down": "down",
    "line_start": "home",
    "line_end": "end",
    "doc_start": "ctrl+home",
    "doc_end": "ctrl+end",
}

_FORMATS = (
    ("bold", "**", "ctrl+b"),
    ("italic", "*", "ctrl+i"),
    ("underline", "__", "ctrl+u"),
    ("strikethrough", "~~", "ctrl+shift+x"),
)


def _motion_actions() -> tuple[ActionRef, ...]:
    actions = []
    for name, op, description in _MOTIONS:
        actions.append(
            ActionRef(
                id=f"cursor.{name}",
                handler=_motion(op, False),
                description=description,
                category="motion",
            )
        )
        actions.append(
            ActionRef(
                id=f"select.{name}",
                handler=_motion(op, True),
                description=f"{description}, extending the selection",
                category="motion",
            )
        )
    return tuple(actions)


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    *_motion_actions(),
    ActionRef(
        id="select.all",
        handler=lambda session: session.apply(movement.select_all),
        description="Select the whole document",
        category="motion",
    ),
    ActionRef(
        id="edit.backspace",
        handler=lambda session: session.press_backspace(),
        description="Delete backward",
    ),
    ActionRef(
        id="edit.delete",
        handler=lambda session: session.press_delete(),
        description="Delete forward",
    ),
    ActionRef(
        id="edit.newline",
        handler=lambda session: session.press_enter(),
        description="Insert a newline, continuing bullets",
    ),
    ActionRef(
        id="edit.space",
        handler=lambda session: session.press_space(),
        description="Insert a space, expanding macros, bullets and links",
    ),
    ActionRef(
        id="edit.indent",
        handler=lambda session: session.press_tab(),
        description="Indent a bullet or insert a tab",
    ),
    ActionRef(
        id="edit.outdent",
        handler=lambda session: session.press_shift_tab(),
        description="Outdent a bullet",
    ),
    *(
        ActionRef(
            id=f"format.{name}",
            handler=_format(marker),
            description=f"Toggle {name}",
        )
        for name, marker, _ in _FORMATS
    ),
    ActionRef(
        id="history.undo",
        handler=lambda session: session.undo(),
        description="Undo the last edit",
        category="history",
    ),
    ActionRef(
        id="history.redo",
        handler=lambda session: session.redo(),
        description="Redo the last undone edit",
        category="history",
    ),
    ActionRef(
        id="lines.swap_up",
        handler=lambda session: session.edit("swap_line", reorder.swap_line_up),
        description="Move the current line up",
    ),
    ActionRef(
        id="lines.swap_down",
        handler=lambda session: session.edit("swap_line", reorder.swap_line_down),
        description="Move the current line down",
    ),
    ActionRef(
        id="sections.swap_up",
        handler=_swap_section(reorder.swap_heading_section_up),
        description="Move the current section up",
    ),
    ActionRef(
        id="sections.swap_down",
        handler=_swap_section(reorder.swap_heading_section_down),
        description="Move the current section down",
    ),
    ActionRef(
        id="sections.toggle_collapse",
        handler=_toggle_collapse,
        description="Collapse or expand the heading under the cursor",
    ),
)


def _motion_bindings() -> tuple[Binding, ...]:
    bindings = []
    for name, _, description in _MOTIONS:
        key = _MOTION_KEYS[name]
        bindings.append(
            Binding(
                id=f"motion.{name}",
                chord=key,
                action_id=f"cursor.{name}",
                description=description,
            )
        )
        bindings.append(
            Binding(
                id=f"motion.select_{name}",
                chord=f"shift+{key}",
                action_id=f"select.{name}",
                description=f"{description}, extending the selection",
            )
        )
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *_motion_bindings(),
    Binding(id="select.all", chord="ctrl+a", action_id="select.all"),
    Binding(id="edit.backspace", chord="backspace", action_id="edit.backspace"),
    Binding(id="edit.delete", chord="delete", action_id="edit.delete"),
    Binding(id="edit.enter", chord="enter", action_id="edit.newline"),
    Binding(id="edit.space", chord="space", action_id="edit.space"),
    Binding(id="edit.tab", chord="tab", action_id="edit.indent"),
    Binding(id="edit.shift_tab", chord="shift+tab", action_id="edit.outdent"),
    *(
        Binding(id=f"format.{name}", chord=chord, action_id=f"format.{name}")
        for name, _, chord in _FORMATS
    ),
    Binding(id="history.undo", chord="ctrl+z", action_id="history.undo"),
    Binding(id="history.redo", chord="ctrl+shift+z", action_id="history.redo"),
    Binding(id="history.redo_alt", chord="ctrl+y", action_id="history.redo"),
    Binding(id="lines.swap_up", chord="ctrl+shift+up", action_id="lines.swap_up"),
    Binding(id="lines.swap_down", chord="ctrl+shift+down", action_id="lines.swap_down"),
    Binding(id="sections.swap_up", chord="alt+up", action_id="sections.swap_up"),
    Binding(id="sections.swap_down", chord="alt+down", action_id="sections.swap_down"),
    Binding(
        id="sections.toggle_collapse",
        chord="ctrl+period",
        action_id="sections.toggle_collapse",
        when=("heading_line",),
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings."""

    wants_action = _id_filter(include_actions, exclude_actions)
    wants_binding = _id_filter(include_bindings, exclude_bindings)

    for action in filter(lambda a: wants_action(a.id), DEFAULT_ACTIONS):
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        # Bindings whose action was filtered out are skipped silently.
        if wants_binding(binding.id) and registry.has_action(binding.action_id):
            registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _id_filter(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> Callable[[str], bool]:
    allowed = frozenset(include) if include else None
    blocked = frozenset(exclude or ())
    return lambda item_id: item_id not in blocked and (allowed is None or item_id in allowed)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
