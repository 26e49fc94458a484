from journal_editor.actions import (
    SearchMatch,
    find_all_matches,
    replace_all,
    replace_match,
    select_match,
)
from journal_editor.buffer import CursorPosition, EditorState


def make_state(*lines: str, line: int = 0, col: int = 0) -> EditorState:
    return EditorState(lines, CursorPosition(line, col))


def test_matches_overlap() -> None:
    assert find_all_matches(["aaa"], "aa") == [
        SearchMatch(0, 0, 2),
        SearchMatch(0, 1, 3),
    ]


def test_matches_are_case_insensitive_across_lines() -> None:
    matches = find_all_matches(["Hello", "say hello"], "HELLO")

    assert matches == [SearchMatch(0, 0, 5), SearchMatch(1, 4, 9)]


def test_empty_query_finds_nothing() -> None:
    assert find_all_matches(["abc"], "") == []


def test_regex_characters_are_literal() -> None:
    assert find_all_matches(["a.c abc"], "a.c") == [SearchMatch(0, 0, 3)]


def test_replace_match_moves_cursor_after_replacement() -> None:
    state = replace_match(make_state("say hello"), SearchMatch(0, 4, 9), "hi")

    assert state.lines == ("say hi",)
    assert state.cursor == CursorPosition(0, 6)


def test_replace_all() -> None:
    state = replace_all(make_state("Cat cat", "no", "CAT", line=2, col=3), "cat", "dog")

    assert state.lines == ("dog dog", "no", "dog")
    assert state.cursor == CursorPosition(2, 3)


def test_replace_all_clamps_cursor_on_shorter_line() -> None:
    state = replace_all(make_state("abcdef", col=6), "bcdef", "x")

    assert state.lines == ("ax",)
    assert state.cursor == CursorPosition(0, 2)


def test_replace_all_keeps_backslashes_literal() -> None:
    state = replace_all(make_state("a-b"), "-", r"\1")

    assert state.lines == ("a\\1b",)


def test_replace_all_without_match_is_identity() -> None:
    state = make_state("abc")

    assert replace_all(state, "zzz", "y") is state
    assert replace_all(state, "", "y") is state


def test_select_match() -> None:
    state = select_match(make_state("one", "two three"), SearchMatch(1, 4, 9))

    assert state.selection_anchor == CursorPosition(1, 4)
    assert state.cursor == CursorPosition(1, 9)
