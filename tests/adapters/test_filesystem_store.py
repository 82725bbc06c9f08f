from __future__ import annotations

import asyncio
import json
from pathlib import Path  # noqa: TC003

import pytest

from reviewdesk.adapters.filesystem import LocalDocumentWriter, LocalMetadataStore
from reviewdesk.domain.loading import load_rows
from reviewdesk.domain.model import ResourceType
from reviewdesk.domain.ports.metadata import DocumentNotFound


def _root(tmp_path: Path) -> Path:
    root = tmp_path / "domains" / "prod" / "acme"
    (root / "dashboard_12").mkdir(parents=True)
    (root / "dashboard_12" / "definition.json").write_text(json.dumps({"id": 12, "name": "Sales"}))
    (root / "notes.txt").write_text("ignored")
    return root


def test_lists_directories_and_files(tmp_path: Path) -> None:
    root = _root(tmp_path)
    store = LocalMetadataStore()

    entries = asyncio.run(store.list_directory(str(root)))

    assert [(entry.name, entry.is_directory) for entry in entries] == [
        ("dashboard_12", True),
        ("notes.txt", False),
    ]
    assert entries[0].path == (root / "dashboard_12").as_posix()


def test_missing_paths_raise_not_found(tmp_path: Path) -> None:
    store = LocalMetadataStore()

    with pytest.raises(DocumentNotFound):
        asyncio.run(store.read_document(str(tmp_path / "absent.json")))
    with pytest.raises(DocumentNotFound):
        asyncio.run(store.list_directory(str(tmp_path / "absent")))
    with pytest.raises(DocumentNotFound):
        asyncio.run(store.read_file_info(str(tmp_path / "absent.md")))


def test_file_info_reports_modification_time(tmp_path: Path) -> None:
    root = _root(tmp_path)
    store = LocalMetadataStore()

    info = asyncio.run(store.read_file_info(str(root / "notes.txt")))

    assert info.modified is not None
    assert info.modified.tzinfo is not None


def test_loader_reads_a_local_tree(tmp_path: Path) -> None:
    root = _root(tmp_path)

    rows = asyncio.run(load_rows(LocalMetadataStore(), str(root), ResourceType.DASHBOARD))

    assert [(row.key, row.label) for row in rows] == [("12", "Sales")]
    assert rows[0].resource_url == "https://acme.thinkval.io/dashboard/private/12"


def test_writer_replaces_documents(tmp_path: Path) -> None:
    target = tmp_path / "table_orders" / "definition_analysis.json"
    writer = LocalDocumentWriter()

    asyncio.run(writer(str(target), '{"action": "Keep"}'))
    asyncio.run(writer(str(target), '{"action": "Drop"}'))

    assert json.loads(target.read_text()) == {"action": "Drop"}
    assert sorted(path.name for path in target.parent.iterdir()) == ["definition_analysis.json"]
