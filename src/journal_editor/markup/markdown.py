"""Heading and bullet line syntax."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence

HEADING_PATTERN = re.compile(r"^(?:~S(\d+)~ )?(\^ )?(#{1,6}) ")
SCROLL_PREFIX_PATTERN = re.compile(r"^~S\d+~ ")
BULLET_PATTERN = re.compile(r"^(\t+)- ")
COLLAPSE_MARKER = "^ "


@dataclass(frozen=True, slots=True)
class HeadingInfo:
    level: int
    prefix_length: int
    collapsed: bool = False
    scrollable_lines: Optional[int] = None


@dataclass(frozen=True, slots=True)
class BulletInfo:
    indent_level: int
    prefix_length: int


def get_heading_info(line: str) -> Optional[HeadingInfo]:
    match = HEADING_PATTERN.match(line)
    if match is None:
        return None
    scroll = match.group(1)
    return HeadingInfo(
        level=len(match.group(3)),
        prefix_length=match.end(),
        collapsed=match.group(2) is not None,
        scrollable_lines=int(scroll) if scroll is not None else None,
    )


def get_bullet_info(line: str) -> Optional[BulletInfo]:
    match = BULLET_PATTERN.match(line)
    if match is None:
        return None
    return BulletInfo(indent_level=len(match.group(1)), prefix_length=match.end())


def get_heading_level(line: str) -> float:
    """Heading depth, or ``math.inf`` so non-headings sort below every level."""

    info = get_heading_info(line)
    return info.level if info is not None else math.inf


def is_heading_line(line: str) -> bool:
    return HEADING_PATTERN.match(line) is not None


def is_collapsed_heading(line: str) -> bool:
    info = get_heading_info(line)
    return info is not None and info.collapsed


def collapse_marker_offset(line: str) -> int:
    """Column where a ``^ `` marker lives (or would be inserted) on a heading."""

    match = SCROLL_PREFIX_PATTERN.match(line)
    return match.end() if match else 0


def collapsed_heading_indices(lines: Sequence[str]) -> frozenset[int]:
    return frozenset(i for i, line in enumerate(lines) if is_collapsed_heading(line))


__all__ = [
    "BulletInfo",
    "COLLAPSE_MARKER",
    "HeadingInfo",
    "collapse_marker_offset",
    "collapsed_heading_indices",
    "get_bullet_info",
    "get_heading_info",
    "get_heading_level",
    "is_collapsed_heading",
    "is_heading_line",
]
