from journal_editor.actions import (
    backspace,
    delete_forward,
    delete_selection,
    indent_line,
    insert_character,
    insert_newline,
    insert_space,
    insert_tab,
    insert_text,
    outdent_line,
)
from journal_editor.buffer import CursorPosition, EditorState, get_selected_text


def cursor(line: int, col: int) -> CursorPosition:
    return CursorPosition(line, col)


def make_state(
    *lines: str, at: CursorPosition = CursorPosition(), anchor: CursorPosition | None = None
) -> EditorState:
    return EditorState(lines, at, anchor)


def test_backspace_deletes_previous_character() -> None:
    state = backspace(make_state("abc", at=cursor(0, 2)))

    assert state.lines == ("ac",)
    assert state.cursor == cursor(0, 1)


def test_backspace_at_line_start_merges_with_previous_line() -> None:
    state = backspace(make_state("ab", "cd", at=cursor(1, 0)))

    assert state.lines == ("abcd",)
    assert state.cursor == cursor(0, 2)


def test_backspace_at_origin_is_identity() -> None:
    state = make_state("ab")

    assert backspace(state) is state


def test_backspace_inside_bullet_prefix_strips_it() -> None:
    state = backspace(make_state("\t- item", at=cursor(0, 3)))

    assert state.lines == ("item",)
    assert state.cursor == cursor(0, 0)


def test_backspace_with_selection_deletes_selection() -> None:
    state = backspace(make_state("hello", at=cursor(0, 4), anchor=cursor(0, 1)))

    assert state.lines == ("ho",)
    assert state.cursor == cursor(0, 1)


def test_delete_forward_joins_next_line() -> None:
    state = delete_forward(make_state("ab", "cd", at=cursor(0, 2)))

    assert state.lines == ("abcd",)
    assert state.cursor == cursor(0, 2)


def test_delete_forward_at_document_end_is_identity() -> None:
    state = make_state("ab", at=cursor(0, 2))

    assert delete_forward(state) is state


def test_delete_selection_across_lines() -> None:
    state = delete_selection(
        make_state("hello", "big", "world", at=cursor(2, 3), anchor=cursor(0, 2))
    )

    assert state.lines == ("held",)
    assert state.cursor == cursor(0, 2)
    assert state.selection_anchor is None


def test_delete_selection_without_anchor_is_identity() -> None:
    state = make_state("abc")

    assert delete_selection(state) is state


def test_delete_selection_with_collapsed_anchor_only_clears_it() -> None:
    state = delete_selection(make_state("abc", at=cursor(0, 1), anchor=cursor(0, 1)))

    assert state.lines == ("abc",)
    assert state.selection_anchor is None


def test_insert_character_replaces_selection() -> None:
    state = insert_character(
        make_state("hello", at=cursor(0, 5), anchor=cursor(0, 0)), "X"
    )

    assert state.lines == ("X",)
    assert state.cursor == cursor(0, 1)


def test_insert_tab_inserts_literal_tab() -> None:
    state = insert_tab(make_state("ab", at=cursor(0, 1)))

    assert state.lines == ("a\tb",)
    assert state.cursor == cursor(0, 2)


def test_insert_newline_splits_line() -> None:
    state = insert_newline(make_state("hello", at=cursor(0, 2)))

    assert state.lines == ("he", "llo")
    assert state.cursor == cursor(1, 0)


def test_insert_newline_continues_bullet() -> None:
    state = insert_newline(make_state("\t\t- abc", at=cursor(0, 7)))

    assert state.lines == ("\t\t- abc", "\t\t- ")
    assert state.cursor == cursor(1, 4)


def test_insert_newline_on_empty_bullet_exits_list() -> None:
    state = insert_newline(make_state("a", "\t- ", at=cursor(1, 3)))

    assert state.lines == ("a", "")
    assert state.cursor == cursor(1, 0)


def test_insert_space_expands_bullet_stub() -> None:
    state = insert_space(make_state("-", at=cursor(0, 1)))

    assert state.lines == ("\t- ",)
    assert state.cursor == cursor(0, 3)


def test_insert_space_keeps_stub_indent_up_to_cap() -> None:
    nested = insert_space(make_state("\t\t-", at=cursor(0, 3)))
    capped = insert_space(make_state("\t" * 7 + "-", at=cursor(0, 8)), max_indent=5)

    assert nested.lines == ("\t\t- ",)
    assert capped.lines == ("\t" * 5 + "- ",)


def test_insert_space_elsewhere_types_a_space() -> None:
    state = insert_space(make_state("a-", at=cursor(0, 2)))

    assert state.lines == ("a- ",)


def test_indent_line_nests_bullet() -> None:
    state = indent_line(make_state("\t- a", at=cursor(0, 4)))

    assert state.lines == ("\t\t- a",)
    assert state.cursor == cursor(0, 5)


def test_indent_line_at_cap_inserts_tab() -> None:
    line = "\t" * 5 + "- a"
    state = indent_line(make_state(line, at=cursor(0, len(line))), max_indent=5)

    assert state.lines == (line + "\t",)


def test_indent_line_off_bullet_inserts_tab() -> None:
    state = indent_line(make_state("ab", at=cursor(0, 1)))

    assert state.lines == ("a\tb",)


def test_outdent_line_removes_one_level() -> None:
    state = outdent_line(make_state("\t\t- a", at=cursor(0, 5)))

    assert state.lines == ("\t- a",)
    assert state.cursor == cursor(0, 4)


def test_outdent_line_at_top_level_is_identity() -> None:
    state = make_state("\t- a", at=cursor(0, 4))

    assert outdent_line(state) is state


def test_insert_text_with_newlines() -> None:
    state = insert_text(make_state("ab", at=cursor(0, 1)), "X\nY\nZ")

    assert state.lines == ("aX", "Y", "Zb")
    assert state.cursor == cursor(2, 1)


def test_insert_text_single_line() -> None:
    state = insert_text(make_state("ab", at=cursor(0, 1)), "xyz")

    assert state.lines == ("axyzb",)
    assert state.cursor == cursor(0, 4)


def test_reinserting_deleted_selection_restores_lines() -> None:
    state = make_state("hello world", "second line", at=cursor(1, 6), anchor=cursor(0, 6))

    restored = insert_text(delete_selection(state), get_selected_text(state))

    assert restored.lines == state.lines
    assert restored.cursor == cursor(1, 6)
