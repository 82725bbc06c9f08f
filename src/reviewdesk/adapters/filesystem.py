"""Metadata store and document writer backed by a local directory tree."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from reviewdesk.domain.ports.metadata import (
    DirectoryEntry,
    DocumentNotFound,
    FileInfo,
    MetadataStoreError,
)

if TYPE_CHECKING:
    from reviewdesk.domain.ports.metadata import DocumentWriter, MetadataStore

log = getLogger(__name__)


def _list_directory(path: str) -> list[DirectoryEntry]:
    directory = Path(path)
    try:
        children = sorted(directory.iterdir(), key=lambda child: child.name)
    except FileNotFoundError as exc:
        raise DocumentNotFound(path) from exc
    except OSError as exc:
        raise MetadataStoreError(f"Cannot list {path}: {exc.strerror or exc}", path=path) from exc
    return [
        DirectoryEntry(name=child.name, path=child.as_posix(), is_directory=child.is_dir())
        for child in children
    ]


def _read_document(path: str, encoding: str) -> str:
    try:
        return Path(path).read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise DocumentNotFound(path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise MetadataStoreError(f"Cannot read {path}: {exc}", path=path) from exc


def _read_file_info(path: str) -> FileInfo:
    try:
        stat = Path(path).stat()
    except FileNotFoundError as exc:
        raise DocumentNotFound(path) from exc
    except OSError as exc:
        raise MetadataStoreError(f"Cannot stat {path}: {exc.strerror or exc}", path=path) from exc
    return FileInfo(modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC))


def _write_document(path: str, content: str, encoding: str) -> None:
    target = Path(path)
    temporary = target.with_name(f".{target.name}.tmp")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        temporary.write_text(content, encoding=encoding)
        os.replace(temporary, target)
    except OSError as exc:
        temporary.unlink(missing_ok=True)
        raise MetadataStoreError(f"Cannot write {path}: {exc.strerror or exc}", path=path) from exc


@dataclass(frozen=True, slots=True)
class LocalMetadataStore:
    """Read-only view of a directory tree; blocking IO runs in worker threads."""

    encoding: str = "utf-8"

    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        return await asyncio.to_thread(_list_directory, path)

    async def read_document(self, path: str) -> str:
        return await asyncio.to_thread(_read_document, path, self.encoding)

    async def read_file_info(self, path: str) -> FileInfo:
        return await asyncio.to_thread(_read_file_info, path)


@dataclass(frozen=True, slots=True)
class LocalDocumentWriter:
    """Write committed documents in place, replacing the previous file atomically."""

    encoding: str = "utf-8"

    async def __call__(self, path: str, content: str) -> None:
        await asyncio.to_thread(_write_document, path, content, self.encoding)
        log.debug(f"Wrote {len(content)} characters to {path}")


if TYPE_CHECKING:
    _store_check: MetadataStore = LocalMetadataStore()
    _writer_check: DocumentWriter = LocalDocumentWriter()
