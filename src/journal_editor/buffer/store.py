"""Filesystem persistence for journal entries under ``<root>/YYYY/MM/``."""

from __future__ import annotations

import errno
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from journal_editor.runtime import telemetry

from .document import (
    Document,
    PathLike,
    get_file_path,
    has_frontmatter,
    parse_document,
    serialize_document,
    update_modified,
)

_LOGGER = "journal_editor.store"


class JournalStoreError(RuntimeError):
    """Raised when an entry cannot be read or written."""

    def __init__(self, message: str, *, path: PathLike | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


def _describe(exc: OSError, action: str, path: Path) -> str:
    if isinstance(exc, PermissionError):
        return f"Permission denied: cannot {action} {path}"
    if exc.errno == errno.ENOSPC:
        return "Disk full: not enough space to save the file"
    return f"Failed to {action} {path}: {exc}"


class JournalStore:
    """Reads and writes serialized documents below ``root``.

    Writes go to ``<path>.tmp`` first and are renamed into place, so a
    crash mid-save never truncates an existing entry.
    """

    def __init__(self, root: PathLike) -> None:
        self.root = Path(root).expanduser()

    def ensure_dir(self) -> Path:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise JournalStoreError(
                _describe(exc, "create journal directory", self.root), path=self.root
            ) from exc
        return self.root

    def path_for(self, created: datetime) -> Path:
        return get_file_path(self.root, created)

    def write_entry(self, path: PathLike, content: str) -> Path:
        target = Path(path)
        tmp = target.with_name(target.name + ".tmp")
        with telemetry.span(
            "store::write_entry",
            logger_name=_LOGGER,
            component="journal_store",
            metadata={"path": target},
        ) as handle:
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise JournalStoreError(
                    _describe(exc, "create directory", target.parent), path=target
                ) from exc
            try:
                with open(tmp, "w", encoding="utf-8", newline="") as fh:
                    fh.write(content)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp, target)
            except OSError as exc:
                tmp.unlink(missing_ok=True)
                raise JournalStoreError(_describe(exc, "write", target), path=target) from exc
            handle.add_metadata("bytes", len(content.encode("utf-8")))
        return target

    def read_entry(self, path: PathLike) -> str:
        target = Path(path)
        with telemetry.span(
            "store::read_entry", logger_name=_LOGGER, metadata={"path": target}
        ):
            try:
                return target.read_text(encoding="utf-8")
            except FileNotFoundError as exc:
                raise JournalStoreError(f"Entry not found: {target}", path=target) from exc
            except OSError as exc:
                raise JournalStoreError(_describe(exc, "read", target), path=target) from exc

    def list_entries(self) -> List[Path]:
        """Every ``.md`` file two directory levels down, sorted by path."""

        with telemetry.span("store::list_entries", logger_name=_LOGGER) as handle:
            if not self.root.is_dir():
                return []
            entries = sorted(p for p in self.root.glob("*/*/*.md") if p.is_file())
            handle.add_metadata("count", len(entries))
            return entries

    def save(self, doc: Document, now: Optional[datetime] = None) -> Path:
        """Write ``doc`` with a fresh ``modified`` stamp; returns the entry path."""

        updated = update_modified(doc, now)
        return self.write_entry(
            self.path_for(updated.metadata.created), serialize_document(updated)
        )

    def load(self, path: PathLike, now: Optional[datetime] = None) -> Document:
        content = self.read_entry(path)
        if not has_frontmatter(content):
            telemetry.record_event(
                "document.frontmatter_missing",
                level="debug",
                data={"path": str(path)},
                logger_name=_LOGGER,
            )
        return parse_document(content, path, now)


__all__ = ["JournalStore", "JournalStoreError"]
