"""Journal documents and their frontmatter text format."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from pathlib import Path, PurePath
from typing import Any, Dict, Optional, Union

import yaml

from .state import EditorState

FRONTMATTER_PATTERN = re.compile(r"^---\n(.*?)\n---\n?\n?", re.DOTALL)
FILENAME_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})-(\d{2})(\d{2})(\d{2})\.md$")

PathLike = Union[str, PurePath]


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    id: str
    created: datetime
    modified: datetime


@dataclass(frozen=True, slots=True)
class Document:
    metadata: DocumentMetadata
    editor: EditorState

    def with_editor(self, editor: EditorState) -> "Document":
        return replace(self, editor=editor)


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def generate_id() -> str:
    return str(uuid.uuid4())


def create_document(
    editor: Optional[EditorState] = None, now: Optional[datetime] = None
) -> Document:
    stamp = _now(now)
    return Document(
        metadata=DocumentMetadata(id=generate_id(), created=stamp, modified=stamp),
        editor=editor if editor is not None else EditorState(),
    )


def update_modified(doc: Document, now: Optional[datetime] = None) -> Document:
    return replace(doc, metadata=replace(doc.metadata, modified=_now(now)))


def format_timestamp(stamp: datetime) -> str:
    return stamp.isoformat()


def parse_timestamp(raw: str) -> Optional[datetime]:
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def serialize_document(doc: Document) -> str:
    meta = doc.metadata
    frontmatter = "\n".join(
        (
            "---",
            f"id: {meta.id}",
            f"created: {format_timestamp(meta.created)}",
            f"modified: {format_timestamp(meta.modified)}",
            "---",
        )
    )
    return f"{frontmatter}\n\n{doc.editor.text}"


def _read_fields(block: str) -> Dict[str, Any]:
    """Load a frontmatter block; anything but a YAML mapping reads as empty."""

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError:
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_timestamp(value: Any) -> Optional[datetime]:
    # safe_load already resolves unquoted ISO timestamps.
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return parse_timestamp(value)
    return None


def timestamp_from_path(filepath: Optional[PathLike]) -> Optional[datetime]:
    """Creation time encoded in a ``YYYY-MM-DD-HHMMSS.md`` file name."""

    if filepath is None:
        return None
    match = FILENAME_PATTERN.search(PurePath(filepath).name)
    if match is None:
        return None
    try:
        return datetime(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def has_frontmatter(content: str) -> bool:
    return FRONTMATTER_PATTERN.match(content) is not None


def parse_document(
    content: str,
    filepath: Optional[PathLike] = None,
    now: Optional[datetime] = None,
) -> Document:
    """Inverse of ``serialize_document``.

    Content without a frontmatter block becomes the body verbatim, with
    metadata fabricated from ``filepath`` or ``now``. Missing or malformed
    frontmatter fields are fabricated the same way.
    """

    fallback = timestamp_from_path(filepath) or _now(now)
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        fields: Dict[str, Any] = {}
        body = content
    else:
        fields = _read_fields(match.group(1))
        body = content[match.end() :]

    created = _coerce_timestamp(fields.get("created")) or fallback
    modified = _coerce_timestamp(fields.get("modified")) or created
    raw_id = fields.get("id")
    metadata = DocumentMetadata(
        id=str(raw_id) if raw_id not in (None, "") else generate_id(),
        created=created,
        modified=modified,
    )
    return Document(metadata=metadata, editor=EditorState.from_text(body))


def get_file_path(journal_dir: PathLike, created: datetime) -> Path:
    name = f"{created:%Y-%m-%d-%H%M%S}.md"
    return Path(journal_dir) / f"{created:%Y}" / f"{created:%m}" / name


def is_content_blank(content: str) -> bool:
    """True when the text, ignoring any frontmatter, is only whitespace."""

    match = FRONTMATTER_PATTERN.match(content)
    body = content[match.end() :] if match else content
    return not body.strip()


def is_document_blank(doc: Document) -> bool:
    return all(not line.strip() for line in doc.editor.lines)


__all__ = [
    "Document",
    "DocumentMetadata",
    "create_document",
    "generate_id",
    "get_file_path",
    "has_frontmatter",
    "is_content_blank",
    "is_document_blank",
    "parse_document",
    "serialize_document",
    "timestamp_from_path",
    "update_modified",
]
