from journal_editor.markup import (
    click_to_raw_col,
    display_col_to_raw_col,
    get_display_prefix_length,
    get_word_bounds_at,
    is_word_char,
)


def test_cursor_line_maps_identity_clamped() -> None:
    assert display_col_to_raw_col("a **b**", 3, True) == 3
    assert display_col_to_raw_col("abc", 10, True) == 3
    assert display_col_to_raw_col("abc", -1, True) == 0


def test_hidden_format_markers_are_skipped() -> None:
    assert display_col_to_raw_col("a **b** c", 2) == 2
    assert display_col_to_raw_col("a **b** c", 3) == 5
    assert display_col_to_raw_col("a **b** c", 5) == 9


def test_link_shows_only_its_text() -> None:
    line = "go [site](u) x"

    assert display_col_to_raw_col(line, 3) == 3
    assert display_col_to_raw_col(line, 5) == 12
    assert display_col_to_raw_col(line, 8) == 13


def test_component_has_zero_width() -> None:
    assert display_col_to_raw_col("{{{JSX:<A />}}}b", 0) == 15


def test_past_end_maps_to_line_length() -> None:
    assert display_col_to_raw_col("abc", 50) == 3


def test_display_prefix_length() -> None:
    assert get_display_prefix_length("## T", False) == 3
    assert get_display_prefix_length("## T", True) == 0
    assert get_display_prefix_length("\t- x", True) == 3
    assert get_display_prefix_length("plain", False) == 0


def test_click_to_raw_col_adds_hidden_prefix() -> None:
    assert click_to_raw_col("## **b** x", 1, False) == 6
    assert click_to_raw_col("## T", 2, True) == 2
    assert click_to_raw_col("\t- abc", 1, True) == 4


def test_word_chars() -> None:
    assert is_word_char("a")
    assert is_word_char("7")
    assert not is_word_char("_")
    assert not is_word_char("")


def test_word_bounds() -> None:
    bounds = get_word_bounds_at("hello world", 7)

    assert bounds is not None
    assert (bounds.start, bounds.end) == (6, 11)


def test_word_bounds_just_after_word() -> None:
    bounds = get_word_bounds_at("hello world", 5)

    assert bounds is not None
    assert (bounds.start, bounds.end) == (0, 5)


def test_word_bounds_between_spaces() -> None:
    assert get_word_bounds_at("a  b", 2) is None
    assert get_word_bounds_at("abc", 9) is None
