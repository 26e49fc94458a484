from journal_editor.buffer import (
    CursorPosition,
    EditorState,
    clamp_position,
    create_initial_state,
    get_selected_text,
    get_selection_bounds,
    get_selection_line_range,
    has_selection,
    pos_before,
    pos_equal,
)


def cursor(line: int, col: int) -> CursorPosition:
    return CursorPosition(line, col)


def make_state(
    *lines: str, at: CursorPosition = CursorPosition(), anchor: CursorPosition | None = None
) -> EditorState:
    return EditorState(lines, at, anchor)


def test_initial_state_is_one_blank_line() -> None:
    state = create_initial_state()

    assert state.lines == ("",)
    assert state.cursor == cursor(0, 0)
    assert state.selection_anchor is None


def test_state_clamps_cursor_and_anchor_into_buffer() -> None:
    state = make_state("ab", "cdef", at=cursor(5, 9), anchor=cursor(-1, -3))

    assert state.cursor == cursor(1, 4)
    assert state.selection_anchor == cursor(0, 0)


def test_empty_line_tuple_becomes_single_blank_line() -> None:
    assert EditorState(()).lines == ("",)


def test_clamp_position_returns_same_object_when_in_range() -> None:
    pos = cursor(0, 1)

    assert clamp_position(("ab",), pos) is pos


def test_from_text_and_text_agree() -> None:
    state = EditorState.from_text("one\ntwo\n")

    assert state.lines == ("one", "two", "")
    assert state.text == "one\ntwo\n"


def test_position_ordering_helpers() -> None:
    assert pos_equal(cursor(1, 2), cursor(1, 2))
    assert pos_before(cursor(0, 9), cursor(1, 0))
    assert pos_before(cursor(1, 1), cursor(1, 2))
    assert not pos_before(cursor(1, 2), cursor(1, 2))


def test_selection_bounds_are_symmetric() -> None:
    a, b = cursor(2, 1), cursor(0, 4)

    assert get_selection_bounds(a, b) == get_selection_bounds(b, a)
    assert get_selection_bounds(a, b).start == b


def test_anchor_equal_to_cursor_is_not_a_selection() -> None:
    state = make_state("abc", at=cursor(0, 1), anchor=cursor(0, 1))

    assert not has_selection(state)
    assert get_selected_text(state) == ""
    assert get_selection_line_range(state) is None


def test_selected_text_spans_lines() -> None:
    state = make_state("hello", "big", "world", at=cursor(2, 3), anchor=cursor(0, 2))

    assert get_selected_text(state) == "llo\nbig\nwor"
    assert get_selection_line_range(state) == (0, 2)


def test_selected_text_with_reversed_anchor() -> None:
    state = make_state("hello world", at=cursor(0, 0), anchor=cursor(0, 5))

    assert get_selected_text(state) == "hello"


def test_columns_count_code_points() -> None:
    state = make_state("😀a", at=cursor(0, 5))

    assert state.cursor == cursor(0, 2)
    assert make_state("😀", at=cursor(0, 2)).cursor == cursor(0, 1)
