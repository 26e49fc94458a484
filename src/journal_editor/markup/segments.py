"""Split one line of raw text into typed, non-overlapping segments.

Passes run in a fixed order, each re-splitting only the plain-text pieces
left by the previous one: component blocks, then markdown links, then
inline emphasis. Emphasis runs are re-split recursively for nested
emphasis (never for links or blocks). Every segment records the half-open
raw column range ``[start_col, end_col)`` it covers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, ClassVar, List, Optional, Sequence, Tuple, Union

from .components import BLOCK_PATTERN, Component, try_parse_component

LINK_PATTERN = re.compile(r"\[([^\]]*)\]\(([^)]*)\)")

FORMAT_PATTERNS: Tuple[Tuple[re.Pattern[str], str, int], ...] = (
    (re.compile(r"\*\*(.+?)\*\*"), "bold", 2),
    (re.compile(r"~~(.+?)~~"), "strikethrough", 2),
    (re.compile(r"__(.+?)__"), "underline", 2),
    (re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)"), "italic", 1),
)

FORMAT_MARKERS = {"bold": "**", "strikethrough": "~~", "underline": "__", "italic": "*"}


@dataclass(frozen=True, slots=True)
class TextSegment:
    kind: ClassVar[str] = "text"

    content: str
    start_col: int
    end_col: int


@dataclass(frozen=True, slots=True)
class ComponentSegment:
    kind: ClassVar[str] = "component"

    raw: str
    start_col: int
    end_col: int
    component: Optional[Component] = None
    error: Optional[str] = None

    @property
    def display_text(self) -> str:
        return f"[Error: {self.error}]" if self.error else ""


@dataclass(frozen=True, slots=True)
class LinkSegment:
    kind: ClassVar[str] = "link"

    text: str
    url: str
    start_col: int
    end_col: int


@dataclass(frozen=True, slots=True)
class FormatSegment:
    kind: ClassVar[str] = "format"

    content: str
    format: str
    marker_length: int
    start_col: int
    end_col: int
    children: Tuple["LineSegment", ...] = field(default=())

    @property
    def content_start(self) -> int:
        return self.start_col + self.marker_length


LineSegment = Union[TextSegment, ComponentSegment, LinkSegment, FormatSegment]


@dataclass(frozen=True, slots=True)
class MarkdownLink:
    text: str
    url: str
    start_col: int
    end_col: int


def parse_markdown_links(text: str) -> List[MarkdownLink]:
    """Every ``[text](url)`` in ``text``, finished or not."""

    return [
        MarkdownLink(m.group(1), m.group(2), m.start(), m.end())
        for m in LINK_PATTERN.finditer(text)
    ]


def _split_components(line: str) -> List[LineSegment]:
    segments: List[LineSegment] = []
    last = 0
    for match in BLOCK_PATTERN.finditer(line):
        if match.start() > last:
            segments.append(TextSegment(line[last : match.start()], last, match.start()))
        component, error = try_parse_component(match.group(1))
        segments.append(
            ComponentSegment(
                raw=match.group(0),
                start_col=match.start(),
                end_col=match.end(),
                component=component,
                error=error,
            )
        )
        last = match.end()
    if last < len(line) or not segments:
        segments.append(TextSegment(line[last:], last, len(line)))
    return segments


def _link_is_finished(line: str, end: int) -> bool:
    return end >= len(line) or line[end].isspace()


def _split_links(segment: TextSegment, line: str) -> List[LineSegment]:
    content, base = segment.content, segment.start_col
    pieces: List[LineSegment] = []
    last = 0
    for match in LINK_PATTERN.finditer(content):
        if not _link_is_finished(line, base + match.end()):
            continue
        if match.start() > last:
            pieces.append(
                TextSegment(content[last : match.start()], base + last, base + match.start())
            )
        pieces.append(
            LinkSegment(match.group(1), match.group(2), base + match.start(), base + match.end())
        )
        last = match.end()
    if not pieces:
        return [segment]
    if last < len(content):
        pieces.append(TextSegment(content[last:], base + last, segment.end_col))
    return pieces


def _format_matches(content: str) -> List[Tuple[int, int, str, str, int]]:
    found = [
        (m.start(), m.end(), m.group(1), name, marker)
        for pattern, name, marker in FORMAT_PATTERNS
        for m in pattern.finditer(content)
    ]
    # Stable sort keeps pattern priority (bold first) for matches sharing a start.
    found.sort(key=lambda item: item[0])
    kept: List[Tuple[int, int, str, str, int]] = []
    last_end = 0
    for item in found:
        if item[0] >= last_end:
            kept.append(item)
            last_end = item[1]
    return kept


def _split_formats(segment: TextSegment) -> List[LineSegment]:
    content, base = segment.content, segment.start_col
    matches = _format_matches(content)
    if not matches:
        return [segment]
    pieces: List[LineSegment] = []
    last = 0
    for start, end, inner, name, marker in matches:
        if start > last:
            pieces.append(TextSegment(content[last:start], base + last, base + start))
        inner_start = base + start + marker
        children = tuple(
            _split_formats(TextSegment(inner, inner_start, inner_start + len(inner)))
        )
        pieces.append(
            FormatSegment(
                content=inner,
                format=name,
                marker_length=marker,
                start_col=base + start,
                end_col=base + end,
                children=children,
            )
        )
        last = end
    if last < len(content):
        pieces.append(TextSegment(content[last:], base + last, segment.end_col))
    return pieces


def _resplit(
    segments: Sequence[LineSegment],
    splitter: Callable[[TextSegment], List[LineSegment]],
) -> List[LineSegment]:
    result: List[LineSegment] = []
    for segment in segments:
        if isinstance(segment, TextSegment):
            result.extend(splitter(segment))
        else:
            result.append(segment)
    return result


def parse_line_segments(line: str) -> List[LineSegment]:
    """Segments covering ``line``; an empty line yields one empty text segment."""

    segments = _split_components(line)
    segments = _resplit(segments, lambda seg: _split_links(seg, line))
    return _resplit(segments, _split_formats)


def inline_block_segments(line: str) -> List[Union[ComponentSegment, LinkSegment]]:
    """Link and component segments: the regions the cursor treats as atomic."""

    return [
        seg
        for seg in parse_line_segments(line)
        if isinstance(seg, (ComponentSegment, LinkSegment))
    ]


__all__ = [
    "ComponentSegment",
    "FORMAT_MARKERS",
    "FormatSegment",
    "LineSegment",
    "LinkSegment",
    "MarkdownLink",
    "TextSegment",
    "inline_block_segments",
    "parse_line_segments",
    "parse_markdown_links",
]
