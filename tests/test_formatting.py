from journal_editor.actions import (
    is_url_or_domain,
    toggle_inline_format,
    try_format_url_before_newline,
    try_format_url_before_space,
)
from journal_editor.buffer import CursorPosition, EditorState


def cursor(line: int, col: int) -> CursorPosition:
    return CursorPosition(line, col)


def make_state(
    *lines: str, at: CursorPosition = CursorPosition(), anchor: CursorPosition | None = None
) -> EditorState:
    return EditorState(lines, at, anchor)


def test_toggle_without_selection_inserts_empty_pair() -> None:
    state = toggle_inline_format(make_state("helloworld", at=cursor(0, 5)), "**")

    assert state.lines == ("hello****world",)
    assert state.cursor == cursor(0, 7)


def test_toggle_wraps_selection_and_reanchors() -> None:
    state = toggle_inline_format(
        make_state("hello world", at=cursor(0, 5), anchor=cursor(0, 0)), "**"
    )

    assert state.lines == ("**hello** world",)
    assert state.selection_anchor == cursor(0, 2)
    assert state.cursor == cursor(0, 7)


def test_toggle_twice_restores_text_and_selection() -> None:
    original = make_state("say hi now", at=cursor(0, 6), anchor=cursor(0, 4))

    wrapped = toggle_inline_format(original, "~~")
    restored = toggle_inline_format(wrapped, "~~")

    assert wrapped.lines == ("say ~~hi~~ now",)
    assert restored.lines == original.lines
    assert restored.selection_anchor == cursor(0, 4)
    assert restored.cursor == cursor(0, 6)


def test_toggle_with_backwards_selection() -> None:
    state = toggle_inline_format(
        make_state("abc", at=cursor(0, 0), anchor=cursor(0, 3)), "*"
    )

    assert state.lines == ("*abc*",)
    assert state.selection_anchor == cursor(0, 1)
    assert state.cursor == cursor(0, 4)


def test_toggle_on_multiline_selection_is_identity() -> None:
    state = make_state("ab", "cd", at=cursor(1, 1), anchor=cursor(0, 1))

    assert toggle_inline_format(state, "__") is state


def test_url_detection() -> None:
    assert is_url_or_domain("https://example.com")
    assert is_url_or_domain("http://example.com/path?q=1")
    assert is_url_or_domain("www.example.org")
    assert is_url_or_domain("example.com")
    assert is_url_or_domain("docs.python.org/3/")


def test_url_detection_rejects_files_and_short_words() -> None:
    assert not is_url_or_domain("abc")
    assert not is_url_or_domain("notes.txt")
    assert not is_url_or_domain("install.sh")
    assert not is_url_or_domain("hello")
    assert not is_url_or_domain("example.notatld")


def test_url_before_space_becomes_link() -> None:
    state = try_format_url_before_space(
        make_state("https://example.com ", at=cursor(0, 20))
    )

    assert state is not None
    assert state.lines == ("[https://example.com](https://example.com) ",)
    assert state.cursor == cursor(0, 43)


def test_url_before_space_keeps_trailing_punctuation_outside() -> None:
    state = try_format_url_before_space(
        make_state("see example.com, ", at=cursor(0, 17))
    )

    assert state is not None
    assert state.lines == ("see [example.com](example.com), ",)
    assert state.cursor == cursor(0, 32)


def test_non_url_before_space_is_none() -> None:
    assert try_format_url_before_space(make_state("hello ", at=cursor(0, 6))) is None
    assert try_format_url_before_space(make_state("hello", at=cursor(0, 5))) is None


def test_existing_link_is_not_relinked() -> None:
    state = make_state("(example.com) ", at=cursor(0, 14))

    assert try_format_url_before_space(state) is None


def test_url_before_newline_links_previous_line() -> None:
    state = try_format_url_before_newline(
        make_state("visit example.com", "", at=cursor(1, 0))
    )

    assert state is not None
    assert state.lines == ("visit [example.com](example.com)", "")
    assert state.cursor == cursor(1, 0)


def test_url_before_newline_on_first_line_is_none() -> None:
    assert try_format_url_before_newline(make_state("example.com")) is None
