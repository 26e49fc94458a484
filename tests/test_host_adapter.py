from datetime import datetime, timezone
from typing import List

from journal_editor.adapters import HostHooks, KeyHostAdapter
from journal_editor.buffer import CursorPosition, EditorMirror, EditorState, create_document
from journal_editor.session import EditorSession

NOW = datetime(2024, 1, 5, tzinfo=timezone.utc)


def make_adapter(
    *lines: str, col: int = 0
) -> tuple[KeyHostAdapter, List[EditorMirror], List[str], List[str]]:
    state = EditorState(lines or ("",), CursorPosition(0, col))
    session = EditorSession(create_document(state, now=NOW), clock=lambda: NOW)
    mirrors: List[EditorMirror] = []
    statuses: List[str] = []
    logs: List[str] = []
    hooks = HostHooks(
        update_buffer=mirrors.append,
        update_status=statuses.append,
        log=logs.append,
    )
    return KeyHostAdapter(session, hooks), mirrors, statuses, logs


def test_adapter_pushes_initial_mirror() -> None:
    _, mirrors, _, _ = make_adapter("hello")

    assert len(mirrors) == 1
    assert mirrors[0].text == "hello"


def test_unbound_printable_inserts_text() -> None:
    adapter, mirrors, _, _ = make_adapter()

    assert adapter.handle_key("a", character="a")
    assert adapter.handle_key("B", character="B")

    assert mirrors[-1].text == "aB"
    assert mirrors[-1].cursor == CursorPosition(0, 2)


def test_bound_key_runs_action_and_reports_status() -> None:
    adapter, mirrors, statuses, _ = make_adapter("abc", col=1)

    assert adapter.handle_key("ctrl+b")

    assert mirrors[-1].text == "a****bc"
    assert statuses[-1] == "format.bold"


def test_space_key_goes_through_keymap() -> None:
    adapter, mirrors, statuses, _ = make_adapter("-", col=1)

    adapter.handle_key("space", character=" ")

    assert mirrors[-1].text == "\t- "
    assert statuses[-1] == "edit.space"


def test_unhandled_key_is_not_consumed() -> None:
    adapter, mirrors, _, _ = make_adapter("abc")

    assert not adapter.handle_key("f12")
    assert not adapter.handle_key("escape", character="\x1b")
    assert mirrors[-1].text == "abc"


def test_key_events_are_logged() -> None:
    adapter, _, _, logs = make_adapter("abc")

    adapter.handle_key("right")

    assert logs[0].startswith("key ->")
    assert "key='right'" in logs[0]
    assert logs[-1].startswith("result <-")
    assert "cursor=(0, 1)" in logs[-1]


def test_blink_toggles_cursor_visibility() -> None:
    adapter, mirrors, _, _ = make_adapter("abc")

    assert adapter.blink() is False
    assert mirrors[-1].cursor_visible is False
    assert adapter.blink() is True


def test_click_and_drag() -> None:
    adapter, mirrors, _, _ = make_adapter("hello world")

    adapter.handle_click(0, 2)
    adapter.handle_drag(0, 5)

    assert mirrors[-1].selection == (CursorPosition(0, 2), CursorPosition(0, 5))


def test_double_click_selects_word() -> None:
    adapter, mirrors, _, _ = make_adapter("hello world")

    adapter.handle_click(0, 8, count=2)

    assert mirrors[-1].selection == (CursorPosition(0, 6), CursorPosition(0, 11))


def test_push_host_text_and_pull_mirror() -> None:
    adapter, _, _, _ = make_adapter("ab", col=1)

    adapter.push_host_text("XY")

    assert adapter.pull_mirror().text == "aXYb"
    assert adapter.session.history.can_undo()


def test_bound_key_goes_through_session_dispatch() -> None:
    adapter, mirrors, _, _ = make_adapter("abc", col=1)
    session = adapter.session
    dispatched: List[str] = []
    original = session.dispatch

    def recording_dispatch(action_id: str) -> object:
        dispatched.append(action_id)
        return original(action_id)

    session.dispatch = recording_dispatch  # type: ignore[method-assign]

    assert adapter.handle_key("right")
    assert dispatched == ["cursor.right"]
    assert mirrors[-1].cursor == CursorPosition(0, 2)
