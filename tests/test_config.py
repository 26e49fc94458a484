from pathlib import Path

import pytest

from journal_editor.runtime import EditorConfig


def test_defaults_from_empty_env() -> None:
    config = EditorConfig.from_env({})

    assert config.history_limit == 500
    assert config.max_bullet_indent == 5
    assert config.macro_suggestion_limit == 10
    assert config.cursor_blink_ms == 530
    assert config.save_debounce_ms == 3000
    assert config.journal_dir == Path("~/journal").expanduser()


def test_values_read_from_env() -> None:
    config = EditorConfig.from_env(
        {
            "JOURNAL_EDITOR_HISTORY_LIMIT": "50",
            "JOURNAL_EDITOR_MAX_BULLET_INDENT": "3",
            "JOURNAL_EDITOR_JOURNAL_DIR": "/tmp/journal",
        }
    )

    assert config.history_limit == 50
    assert config.max_bullet_indent == 3
    assert config.journal_dir == Path("/tmp/journal")


def test_invalid_values_fall_back_to_defaults() -> None:
    config = EditorConfig.from_env(
        {
            "JOURNAL_EDITOR_HISTORY_LIMIT": "lots",
            "JOURNAL_EDITOR_CURSOR_BLINK_MS": "-5",
        }
    )

    assert config.history_limit == 500
    assert config.cursor_blink_ms == 530


def test_non_positive_limits_rejected() -> None:
    with pytest.raises(ValueError):
        EditorConfig(history_limit=0)
    with pytest.raises(ValueError):
        EditorConfig(max_bullet_indent=-1)
