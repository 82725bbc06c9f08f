"""In-memory metadata store and writer fakes for loader and session tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from reviewdesk.domain.ports.metadata import (
    DirectoryEntry,
    DocumentNotFound,
    FileInfo,
    MetadataStoreError,
)

if TYPE_CHECKING:
    from reviewdesk.domain.ports.metadata import DocumentWriter, MetadataStore

ROOT = "/data/domains/prod/acme"
DEFAULT_MODIFIED = datetime(2025, 3, 1, 8, 30, tzinfo=UTC)


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0] or "/"


class FakeMetadataStore:
    """Paths map to text documents; directories are implied by their contents."""

    def __init__(self) -> None:
        self.documents: dict[str, str] = {}
        self.directories: set[str] = set()
        self.modified: dict[str, datetime] = {}
        self.unreadable: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}
        self.listed: list[str] = []

    def add_directory(self, path: str) -> None:
        path = path.rstrip("/")
        while path and path != "/":
            self.directories.add(path)
            path = _parent(path)

    def add_document(
        self,
        path: str,
        content: str | Mapping[str, object],
        *,
        modified: datetime = DEFAULT_MODIFIED,
    ) -> None:
        text = content if isinstance(content, str) else json.dumps(content)
        self.documents[path] = text
        self.modified[path] = modified
        self.add_directory(_parent(path))

    def add_entity(self, folder: str, documents: Mapping[str, str | Mapping[str, object]]) -> str:
        """Create ``ROOT/<folder>`` with the given documents and return its path."""

        folder_path = f"{ROOT}/{folder}"
        self.add_directory(folder_path)
        for name, content in documents.items():
            self.add_document(f"{folder_path}/{name}", content)
        return folder_path

    def gate(self, path: str) -> asyncio.Event:
        """Block ``list_directory(path)`` until the returned event is set."""

        event = asyncio.Event()
        self.gates[path] = event
        return event

    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        self.listed.append(path)
        gate = self.gates.get(path)
        if gate is not None:
            await gate.wait()
        if path in self.unreadable:
            raise MetadataStoreError(f"Permission denied: {path}", path=path)
        path = path.rstrip("/")
        if path not in self.directories:
            raise DocumentNotFound(path)
        names: dict[str, bool] = {}
        for directory in self.directories:
            if _parent(directory) == path:
                names[directory.rsplit("/", 1)[-1]] = True
        for document in self.documents:
            if _parent(document) == path:
                names.setdefault(document.rsplit("/", 1)[-1], False)
        return [
            DirectoryEntry(name=name, path=f"{path}/{name}", is_directory=is_directory)
            for name, is_directory in sorted(names.items())
        ]

    async def read_document(self, path: str) -> str:
        if path in self.unreadable:
            raise MetadataStoreError(f"Permission denied: {path}", path=path)
        try:
            return self.documents[path]
        except KeyError:
            raise DocumentNotFound(path) from None

    async def read_file_info(self, path: str) -> FileInfo:
        if path in self.documents:
            return FileInfo(modified=self.modified.get(path))
        if path in self.directories:
            return FileInfo()
        raise DocumentNotFound(path)


class RecordingWriter:
    def __init__(self, *, fail_on: str | None = None) -> None:
        self.writes: dict[str, str] = {}
        self.fail_on = fail_on

    async def __call__(self, path: str, content: str) -> None:
        if self.fail_on is not None and path.startswith(self.fail_on):
            raise OSError(f"Disk full while writing {path}")
        self.writes[path] = content


class StoreWriter:
    """Writes committed documents back into a fake store so reloads see them."""

    def __init__(self, store: FakeMetadataStore) -> None:
        self.store = store
        self.paths: list[str] = []

    async def __call__(self, path: str, content: str) -> None:
        self.paths.append(path)
        self.store.add_document(path, content)


if TYPE_CHECKING:
    _store_check: MetadataStore = FakeMetadataStore()
    _writer_check: DocumentWriter = RecordingWriter()
