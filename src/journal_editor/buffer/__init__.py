"""Editor state, selection helpers, history and document persistence."""

from .document import (
    Document,
    DocumentMetadata,
    create_document,
    get_file_path,
    is_content_blank,
    is_document_blank,
    parse_document,
    serialize_document,
    update_modified,
)
from .selection import (
    SelectionBounds,
    get_selected_text,
    get_selection_bounds,
    get_selection_line_range,
    has_selection,
    pos_before,
    pos_equal,
)
from .state import CursorPosition, EditorState, clamp_position, create_initial_state
from .store import JournalStore, JournalStoreError
from .sync import EditorMirror, EditorSync
from .undo import MAX_HISTORY, UndoHistory

__all__ = [
    "CursorPosition",
    "Document",
    "DocumentMetadata",
    "EditorMirror",
    "EditorState",
    "EditorSync",
    "JournalStore",
    "JournalStoreError",
    "MAX_HISTORY",
    "SelectionBounds",
    "UndoHistory",
    "clamp_position",
    "create_document",
    "create_initial_state",
    "get_file_path",
    "get_selected_text",
    "get_selection_bounds",
    "get_selection_line_range",
    "has_selection",
    "is_content_blank",
    "is_document_blank",
    "parse_document",
    "pos_before",
    "pos_equal",
    "serialize_document",
    "update_modified",
]
