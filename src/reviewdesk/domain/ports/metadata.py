"""Port for the read-only hierarchical metadata store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


class MetadataStoreError(RuntimeError):
    """Raised by store adapters when a path cannot be read."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class DocumentNotFound(MetadataStoreError):
    """Raised when a document or directory does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not found: {path}", path=path)


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    name: str
    path: str
    is_directory: bool


@dataclass(frozen=True, slots=True)
class FileInfo:
    modified: datetime | None = None


@runtime_checkable
class MetadataStore(Protocol):
    """Async, read-only access to directories and text documents."""

    async def list_directory(self, path: str) -> list[DirectoryEntry]: ...

    async def read_document(self, path: str) -> str: ...

    async def read_file_info(self, path: str) -> FileInfo: ...


@runtime_checkable
class DocumentWriter(Protocol):
    """Caller-supplied sink that persists committed documents."""

    async def __call__(self, path: str, content: str) -> None: ...


__all__ = [
    "DirectoryEntry",
    "DocumentNotFound",
    "DocumentWriter",
    "FileInfo",
    "MetadataStore",
    "MetadataStoreError",
]
