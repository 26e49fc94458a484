"""Inline emphasis toggling and automatic URL linking."""

from __future__ import annotations

import re
from typing import Optional

from journal_editor.buffer.selection import selection_bounds
from journal_editor.buffer.state import CursorPosition, EditorState

INLINE_MARKERS = ("**", "*", "__", "~~")

KNOWN_TLDS = frozenset(
    {
        "com", "org", "net", "edu", "gov", "mil", "int",
        "io", "dev", "app", "ai", "co", "me", "info", "biz",
        "us", "uk", "ca", "de", "fr", "jp", "au", "nl", "eu", "ch", "se", "no",
        "in", "br", "es", "it", "ru", "cn", "nz", "ie",
        "tv", "gg", "fm", "ly", "xyz", "site", "online", "tech", "blog",
        "cloud", "page", "so", "to", "wiki", "news", "store", "shop",
    }
)

FILE_EXTENSIONS = frozenset(
    {
        "txt", "md", "json", "js", "ts", "tsx", "jsx", "py", "rs", "go",
        "png", "jpg", "jpeg", "gif", "svg", "webp", "pdf", "csv", "xml",
        "yaml", "yml", "toml", "html", "css", "zip", "tar", "gz", "exe",
        "sh", "lock", "log", "doc", "docx", "xls", "xlsx", "mp3", "mp4",
    }
)

_SCHEME_URL = re.compile(r"^(?:https?|ftp)://[^\s/?#]+\.[^\s/?#]+(?:[/?#]\S*)?$", re.I)
_WWW_URL = re.compile(r"^www\.[^\s/?#]+\.[^\s/?#]+(?:[/?#]\S*)?$", re.I)
_BARE_DOMAIN = re.compile(r"^(?:[a-z0-9-]+\.)+([a-z]{2,})(?:[/?#]\S*)?$", re.I)
_TRAILING_PUNCTUATION = re.compile(r"[.,;:!?]+$")


def toggle_inline_format(state: EditorState, marker: str) -> EditorState:
    """Wrap or unwrap the single-line selection in ``marker`` pairs.

    Without a selection an empty pair is inserted with the cursor between
    the markers. A multi-line selection is left alone.
    """

    bounds = selection_bounds(state)
    size = len(marker)
    if bounds is None:
        line, col = state.cursor.line, state.cursor.col
        text = state.lines[line]
        return state.with_line(
            line, text[:col] + marker * 2 + text[col:], CursorPosition(line, col + size)
        )
    if bounds.is_multiline:
        return state

    line = bounds.start.line
    start, end = bounds.start.col, bounds.end.col
    text = state.lines[line]
    wrapped = (
        start >= size
        and text[start - size : start] == marker
        and text[end : end + size] == marker
    )
    if wrapped:
        updated = text[: start - size] + text[start:end] + text[end + size :]
        new_start, new_end = start - size, end - size
    else:
        updated = text[:start] + marker + text[start:end] + marker + text[end:]
        new_start, new_end = start + size, end + size
    return state.with_line(
        line, updated, CursorPosition(line, new_end), CursorPosition(line, new_start)
    )


def is_url_or_domain(text: str) -> bool:
    """Heuristic for words worth auto-linking; file names are rejected."""

    if len(text) < 4:
        return False
    if _SCHEME_URL.match(text) or _WWW_URL.match(text):
        return True
    match = _BARE_DOMAIN.match(text)
    if match is None:
        return False
    tld = match.group(1).lower()
    return tld in KNOWN_TLDS and tld not in FILE_EXTENSIONS


def _link_word(text: str, word_start: int, word_end: int) -> Optional[str]:
    """Rewrite ``text[word_start:word_end]`` as a markdown link, or ``None``."""

    word = text[word_start:word_end]
    if not word or word.startswith("("):
        return None
    trailing = _TRAILING_PUNCTUATION.search(word)
    url = word[: trailing.start()] if trailing else word
    punctuation = trailing.group() if trailing else ""
    if not is_url_or_domain(url):
        return None
    return f"{text[:word_start]}[{url}]({url}){punctuation}{text[word_end:]}"


def _word_start(text: str, end: int) -> int:
    start = end
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return start


def try_format_url_before_space(state: EditorState) -> Optional[EditorState]:
    """Link the word ending just before a freshly typed space."""

    line, col = state.cursor.line, state.cursor.col
    text = state.lines[line]
    if col == 0 or text[col - 1] != " ":
        return None
    end = col - 1
    start = _word_start(text, end)
    updated = _link_word(text, start, end)
    if updated is None:
        return None
    cursor = CursorPosition(line, col + len(updated) - len(text))
    return state.with_line(line, updated, cursor)


def try_format_url_before_newline(state: EditorState) -> Optional[EditorState]:
    """Link the word ending the line above the cursor."""

    line = state.cursor.line
    if line == 0:
        return None
    previous = state.lines[line - 1]
    end = len(previous)
    updated = _link_word(previous, _word_start(previous, end), end)
    if updated is None:
        return None
    return state.with_line(line - 1, updated, state.cursor, state.selection_anchor)


__all__ = [
    "INLINE_MARKERS",
    "is_url_or_domain",
    "toggle_inline_format",
    "try_format_url_before_newline",
    "try_format_url_before_space",
]
