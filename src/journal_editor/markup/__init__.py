"""Line syntax: headings, bullets, inline segments, components and folding."""

from .columns import (
    WordBounds,
    click_to_raw_col,
    display_col_to_raw_col,
    get_display_prefix_length,
    get_word_bounds_at,
    is_word_char,
)
from .components import (
    Component,
    ComponentBlock,
    ComponentParseError,
    ComponentRegistry,
    find_component_blocks,
    get_block_at_position,
    is_position_in_block,
    parse_component,
    serialize_block,
    serialize_component,
    try_parse_component,
)
from .folding import get_collapsed_hidden_lines, get_hidden_lines, toggle_heading_collapse
from .markdown import (
    BulletInfo,
    HeadingInfo,
    collapsed_heading_indices,
    get_bullet_info,
    get_heading_info,
    get_heading_level,
    is_collapsed_heading,
    is_heading_line,
)
from .segments import (
    ComponentSegment,
    FormatSegment,
    LinkSegment,
    MarkdownLink,
    TextSegment,
    parse_line_segments,
    parse_markdown_links,
)

__all__ = [
    "BulletInfo",
    "Component",
    "ComponentBlock",
    "ComponentParseError",
    "ComponentRegistry",
    "ComponentSegment",
    "FormatSegment",
    "HeadingInfo",
    "LinkSegment",
    "MarkdownLink",
    "TextSegment",
    "WordBounds",
    "click_to_raw_col",
    "collapsed_heading_indices",
    "display_col_to_raw_col",
    "find_component_blocks",
    "get_block_at_position",
    "get_bullet_info",
    "get_collapsed_hidden_lines",
    "get_display_prefix_length",
    "get_heading_info",
    "get_heading_level",
    "get_hidden_lines",
    "get_word_bounds_at",
    "is_collapsed_heading",
    "is_heading_line",
    "is_position_in_block",
    "is_word_char",
    "parse_component",
    "parse_line_segments",
    "parse_markdown_links",
    "serialize_block",
    "serialize_component",
    "toggle_heading_collapse",
    "try_parse_component",
]
