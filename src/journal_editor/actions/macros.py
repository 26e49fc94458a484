"""Slash macros expanded in place at the cursor.

Macros never read the clock themselves: callers pass ``now`` so that
expansion stays a pure function of its inputs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from journal_editor.buffer.state import CursorPosition, EditorState, Lines

_MACRO_INPUT = re.compile(r"(?:^|(?<=\s))(/\w*)$")


@dataclass(frozen=True, slots=True)
class Macro:
    trigger: str
    expand: Callable[[datetime], str]


def format_long_date(now: datetime) -> str:
    return f"{now:%B} {now.day}, {now.year}"


DEFAULT_MACROS: Tuple[Macro, ...] = (Macro("/date", format_long_date),)


def find_macro(text: str, macros: Sequence[Macro] = DEFAULT_MACROS) -> Optional[Macro]:
    """The first macro whose trigger ends ``text``."""

    return next((m for m in macros if text.endswith(m.trigger)), None)


def expand_macro(
    lines: Sequence[str],
    line: int,
    col: int,
    *,
    now: datetime,
    macros: Sequence[Macro] = DEFAULT_MACROS,
) -> Optional[Tuple[Lines, int]]:
    """Replace a trigger ending at ``col``; returns ``(lines, new_col)``."""

    text = lines[line]
    before = text[:col]
    macro = find_macro(before, macros)
    if macro is None:
        return None
    head = before[: len(before) - len(macro.trigger)]
    expanded = macro.expand(now)
    updated = list(lines)
    updated[line] = head + expanded + text[col:]
    return tuple(updated), len(head) + len(expanded)


def apply_macro(
    state: EditorState,
    *,
    now: datetime,
    macros: Sequence[Macro] = DEFAULT_MACROS,
) -> EditorState:
    line = state.cursor.line
    result = expand_macro(state.lines, line, state.cursor.col, now=now, macros=macros)
    if result is None:
        return state
    lines, col = result
    return EditorState(lines, CursorPosition(line, col), None)


def get_current_macro_input(
    lines: Sequence[str], line: int, col: int
) -> Optional[str]:
    """The ``/word`` being typed at the cursor, if any."""

    if line < 0 or line >= len(lines):
        return None
    match = _MACRO_INPUT.search(lines[line][:col])
    return match.group(1) if match else None


def get_matching_macros(
    text: str, limit: int = 10, macros: Sequence[Macro] = DEFAULT_MACROS
) -> List[Macro]:
    lowered = text.lower()
    return [m for m in macros if m.trigger.lower().startswith(lowered)][:limit]


def accept_macro(
    state: EditorState, macro: Macro, input_length: int, *, now: datetime
) -> EditorState:
    """Replace the ``input_length`` characters before the cursor with ``macro``."""

    line, col = state.cursor.line, state.cursor.col
    text = state.lines[line]
    start = max(col - input_length, 0)
    expanded = macro.expand(now)
    return state.with_line(
        line,
        text[:start] + expanded + text[col:],
        CursorPosition(line, start + len(expanded)),
    )


__all__ = [
    "DEFAULT_MACROS",
    "Macro",
    "accept_macro",
    "apply_macro",
    "expand_macro",
    "find_macro",
    "format_long_date",
    "get_current_macro_input",
    "get_matching_macros",
]
