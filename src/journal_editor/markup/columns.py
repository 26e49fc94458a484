"""Mapping between displayed columns and raw buffer columns.

Off the cursor line a line is shown with its syntax hidden: heading and
bullet prefixes, emphasis markers, link targets (only the link text shows)
and component blocks (zero width). On the cursor line everything except
a bullet prefix is shown verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .markdown import get_bullet_info, get_heading_info
from .segments import (
    ComponentSegment,
    FormatSegment,
    LineSegment,
    LinkSegment,
    TextSegment,
    parse_line_segments,
)

_WORD_CHAR = re.compile(r"[a-zA-Z0-9]")


def _walk(
    segments: Sequence[LineSegment], display_col: int, offset: int
) -> Tuple[Optional[int], int]:
    """Resolve ``display_col`` within ``segments``; returns ``(raw, new_offset)``."""

    for seg in segments:
        if isinstance(seg, LinkSegment):
            width = len(seg.text)
            if display_col <= offset + width:
                return (seg.start_col if display_col <= offset else seg.end_col), offset
            offset += width
        elif isinstance(seg, ComponentSegment):
            continue
        elif isinstance(seg, FormatSegment):
            raw, offset = _walk(seg.children, display_col, offset)
            if raw is not None:
                return raw, offset
        elif isinstance(seg, TextSegment):
            width = len(seg.content)
            if display_col <= offset + width:
                return seg.start_col + (display_col - offset), offset
            offset += width
    return None, offset


def display_col_to_raw_col(
    line_text: str, display_col: int, is_cursor_line: bool = False
) -> int:
    """Raw column under ``display_col`` of ``line_text`` (prefix already removed)."""

    if is_cursor_line:
        return min(max(display_col, 0), len(line_text))
    raw, _ = _walk(parse_line_segments(line_text), max(display_col, 0), 0)
    return len(line_text) if raw is None else raw


def get_display_prefix_length(line_text: str, is_cursor_line: bool) -> int:
    """Length of the raw prefix hidden before the displayed text."""

    heading = get_heading_info(line_text)
    if heading is not None and not is_cursor_line:
        return heading.prefix_length
    bullet = get_bullet_info(line_text)
    if bullet is not None:
        return bullet.prefix_length
    return 0


def click_to_raw_col(line_text: str, display_col: int, is_cursor_line: bool) -> int:
    prefix = get_display_prefix_length(line_text, is_cursor_line)
    body = line_text[prefix:]
    return prefix + display_col_to_raw_col(body, display_col, is_cursor_line)


def is_word_char(char: str) -> bool:
    return bool(char) and _WORD_CHAR.fullmatch(char) is not None


@dataclass(frozen=True, slots=True)
class WordBounds:
    start: int
    end: int


def get_word_bounds_at(line: str, col: int) -> Optional[WordBounds]:
    """The word touching ``col`` (at it or just before it), for double-click."""

    if col < 0 or col > len(line):
        return None
    at = line[col] if col < len(line) else ""
    before = line[col - 1] if col > 0 else ""
    if not (is_word_char(at) or is_word_char(before)):
        return None
    start = col
    while start > 0 and is_word_char(line[start - 1]):
        start -= 1
    end = start if not is_word_char(at) else col
    while end < len(line) and is_word_char(line[end]):
        end += 1
    return WordBounds(start, end)


__all__ = [
    "WordBounds",
    "click_to_raw_col",
    "display_col_to_raw_col",
    "get_display_prefix_length",
    "get_word_bounds_at",
    "is_word_char",
]
