"""Pure editing verbs: ``EditorState`` in, ``EditorState`` out."""

from .blocks import (
    InlineBlockRange,
    delete_block,
    get_inline_block_at,
    get_inline_block_ending_before,
    get_inline_block_starting_after,
    replace_block,
    snap_cursor_out_of_block,
)
from .editing import (
    backspace,
    delete_forward,
    delete_selection,
    indent_line,
    insert_character,
    insert_newline,
    insert_space,
    insert_tab,
    insert_text,
    outdent_line,
)
from .formatting import (
    is_url_or_domain,
    toggle_inline_format,
    try_format_url_before_newline,
    try_format_url_before_space,
)
from .macros import (
    DEFAULT_MACROS,
    Macro,
    accept_macro,
    apply_macro,
    expand_macro,
    find_macro,
    get_current_macro_input,
    get_matching_macros,
)
from .movement import (
    move_cursor_down,
    move_cursor_left,
    move_cursor_right,
    move_cursor_to_doc_end,
    move_cursor_to_doc_start,
    move_cursor_to_line_end,
    move_cursor_to_line_start,
    move_cursor_up,
    select_all,
    select_range,
    set_cursor,
    set_cursor_with_anchor,
)
from .reorder import (
    swap_heading_section_down,
    swap_heading_section_up,
    swap_line_down,
    swap_line_up,
)
from .search import SearchMatch, find_all_matches, replace_all, replace_match, select_match

__all__ = [
    "DEFAULT_MACROS",
    "InlineBlockRange",
    "Macro",
    "SearchMatch",
    "accept_macro",
    "apply_macro",
    "backspace",
    "delete_block",
    "delete_forward",
    "delete_selection",
    "expand_macro",
    "find_all_matches",
    "find_macro",
    "get_current_macro_input",
    "get_inline_block_at",
    "get_inline_block_ending_before",
    "get_inline_block_starting_after",
    "get_matching_macros",
    "indent_line",
    "insert_character",
    "insert_newline",
    "insert_space",
    "insert_tab",
    "insert_text",
    "is_url_or_domain",
    "move_cursor_down",
    "move_cursor_left",
    "move_cursor_right",
    "move_cursor_to_doc_end",
    "move_cursor_to_doc_start",
    "move_cursor_to_line_end",
    "move_cursor_to_line_start",
    "move_cursor_up",
    "outdent_line",
    "replace_all",
    "replace_block",
    "replace_match",
    "select_all",
    "select_match",
    "select_range",
    "set_cursor",
    "set_cursor_with_anchor",
    "snap_cursor_out_of_block",
    "swap_heading_section_down",
    "swap_heading_section_up",
    "swap_line_down",
    "swap_line_up",
    "toggle_inline_format",
    "try_format_url_before_newline",
    "try_format_url_before_space",
]
