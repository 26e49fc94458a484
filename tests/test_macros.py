from datetime import datetime

from journal_editor.actions import (
    DEFAULT_MACROS,
    Macro,
    accept_macro,
    apply_macro,
    expand_macro,
    find_macro,
    get_current_macro_input,
    get_matching_macros,
)
from journal_editor.actions.macros import format_long_date
from journal_editor.buffer import CursorPosition, EditorState

NOW = datetime(2024, 1, 5, 9, 30)


def make_state(text: str, col: int) -> EditorState:
    return EditorState((text,), CursorPosition(0, col))


def test_long_date_format() -> None:
    assert format_long_date(NOW) == "January 5, 2024"
    assert format_long_date(datetime(2023, 12, 25)) == "December 25, 2023"


def test_find_macro_matches_suffix() -> None:
    assert find_macro("note /date") is DEFAULT_MACROS[0]
    assert find_macro("note /dat") is None


def test_expand_macro_replaces_trigger() -> None:
    result = expand_macro(["today /date!"], 0, 11, now=NOW)

    assert result == (("today January 5, 2024!",), 21)


def test_expand_macro_without_trigger() -> None:
    assert expand_macro(["plain"], 0, 5, now=NOW) is None


def test_apply_macro_state() -> None:
    state = apply_macro(make_state("/date", 5), now=NOW)

    assert state.lines == ("January 5, 2024",)
    assert state.cursor == CursorPosition(0, 15)


def test_apply_macro_noop_returns_same_state() -> None:
    state = make_state("hello", 5)

    assert apply_macro(state, now=NOW) is state


def test_custom_macros() -> None:
    shrug = Macro("/shrug", lambda _now: "¯\\_(ツ)_/¯")

    state = apply_macro(make_state("ok /shrug", 9), now=NOW, macros=(shrug,))

    assert state.lines == ("ok ¯\\_(ツ)_/¯",)


def test_current_macro_input() -> None:
    assert get_current_macro_input(["note /da"], 0, 8) == "/da"
    assert get_current_macro_input(["/"], 0, 1) == "/"
    assert get_current_macro_input(["a/da"], 0, 4) is None
    assert get_current_macro_input(["note /da"], 3, 0) is None


def test_matching_macros_by_prefix() -> None:
    assert get_matching_macros("/d") == [DEFAULT_MACROS[0]]
    assert get_matching_macros("/D") == [DEFAULT_MACROS[0]]
    assert get_matching_macros("/x") == []
    assert get_matching_macros("/", limit=0) == []


def test_accept_macro_replaces_typed_input() -> None:
    state = accept_macro(make_state("note /da", 8), DEFAULT_MACROS[0], 3, now=NOW)

    assert state.lines == ("note January 5, 2024",)
    assert state.cursor == CursorPosition(0, 20)
