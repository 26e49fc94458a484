"""Editor settings resolved from ``JOURNAL_EDITOR_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from . import telemetry

DEFAULT_HISTORY_LIMIT = 500
DEFAULT_MAX_BULLET_INDENT = 5
DEFAULT_MACRO_SUGGESTION_LIMIT = 10
DEFAULT_CURSOR_BLINK_MS = 530
DEFAULT_SAVE_DEBOUNCE_MS = 3000


def _lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    return env.get(f"{telemetry.ENV_PREFIX}{name}")


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _lookup(env, name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        telemetry.record_event(
            "config.invalid_value",
            level="warning",
            data={"name": name, "value": raw, "fallback": default},
            logger_name="journal_editor.config",
        )
        return default
    return value


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables consumed by the session, host adapter and journal store.

    ``journal_dir`` is the default root for ``EditorSession.save``.
    ``cursor_blink_ms`` and ``save_debounce_ms`` are read only by hosts, which
    own the timers that call ``blink`` and ``save``.
    """

    history_limit: int = DEFAULT_HISTORY_LIMIT
    max_bullet_indent: int = DEFAULT_MAX_BULLET_INDENT
    macro_suggestion_limit: int = DEFAULT_MACRO_SUGGESTION_LIMIT
    cursor_blink_ms: int = DEFAULT_CURSOR_BLINK_MS
    save_debounce_ms: int = DEFAULT_SAVE_DEBOUNCE_MS
    journal_dir: Path = Path("~/journal")

    def __post_init__(self) -> None:
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive")
        if self.max_bullet_indent <= 0:
            raise ValueError("max_bullet_indent must be positive")
        object.__setattr__(self, "journal_dir", Path(self.journal_dir).expanduser())

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """Build a config from ``env`` (defaults to ``os.environ``).

        Non-numeric or non-positive integers fall back to their defaults and
        are reported as ``config.invalid_value`` warnings.
        """

        source = os.environ if env is None else env
        journal_dir = _lookup(source, "JOURNAL_DIR") or "~/journal"
        return cls(
            history_limit=_positive_int(
                source, "HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT
            ),
            max_bullet_indent=_positive_int(
                source, "MAX_BULLET_INDENT", DEFAULT_MAX_BULLET_INDENT
            ),
            macro_suggestion_limit=_positive_int(
                source, "MACRO_SUGGESTIONS", DEFAULT_MACRO_SUGGESTION_LIMIT
            ),
            cursor_blink_ms=_positive_int(
                source, "CURSOR_BLINK_MS", DEFAULT_CURSOR_BLINK_MS
            ),
            save_debounce_ms=_positive_int(
                source, "SAVE_DEBOUNCE_MS", DEFAULT_SAVE_DEBOUNCE_MS
            ),
            journal_dir=Path(journal_dir),
        )


__all__ = ["EditorConfig"]
