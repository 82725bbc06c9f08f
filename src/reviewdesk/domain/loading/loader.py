"""Load one generation of canonical rows for a resource type."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from reviewdesk.domain.errors import SourceUnavailable
from reviewdesk.domain.model import ResourceType
from reviewdesk.domain.ports.metadata import MetadataStoreError

from .artifacts import row_from_artifact_directory
from .documents import OVERVIEW_DOCUMENT, EntityDocuments
from .tables import read_tables_index, row_from_index_entry, row_from_table_directory
from .urls import DEFAULT_PORTAL_HOST, build_resource_url

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reviewdesk.domain.model import Row
    from reviewdesk.domain.ports.metadata import DirectoryEntry, MetadataStore

log = getLogger(__name__)


async def load_rows(
    store: MetadataStore,
    root: str,
    resource_type: ResourceType,
    *,
    portal_host: str = DEFAULT_PORTAL_HOST,
) -> list[Row]:
    """Load every row of ``resource_type`` found under ``root``.

    Tables are read from the consolidated index when it lists anything,
    otherwise every entity directory is rebuilt from its own documents. A
    missing or corrupt document only blanks the fields it would have supplied;
    ``SourceUnavailable`` is raised solely when ``root`` cannot be listed.
    """

    if resource_type is ResourceType.TABLE:
        entries = await read_tables_index(store, root)
        if entries is not None:
            index_rows = [row_from_index_entry(root, entry) for entry in entries]
            index_documents = [EntityDocuments(store, row.folder_path) for row in index_rows]
            finished = await _finish_rows(index_rows, index_documents, portal_host=portal_host)
            log.info(f"Loaded {len(finished)} table rows from index at {root}")
            return finished

    directories = await _list_entity_directories(store, root, resource_type)
    documents = [EntityDocuments(store, directory.path) for directory in directories]
    if resource_type is ResourceType.TABLE:
        rows = await asyncio.gather(
            *(
                row_from_table_directory(docs, directory)
                for docs, directory in zip(documents, directories, strict=True)
            )
        )
    else:
        rows = await asyncio.gather(
            *(
                row_from_artifact_directory(docs, directory, resource_type)
                for docs, directory in zip(documents, directories, strict=True)
            )
        )

    finished = await _finish_rows(list(rows), documents, portal_host=portal_host)
    if resource_type.is_artifact:
        finished.sort(key=lambda row: (row.label.casefold(), row.folder_name))
    log.info(f"Loaded {len(finished)} {resource_type} rows by scanning {root}")
    return finished


async def _list_entity_directories(
    store: MetadataStore, root: str, resource_type: ResourceType
) -> list[DirectoryEntry]:
    try:
        entries = await store.list_directory(root)
    except MetadataStoreError as exc:
        raise SourceUnavailable(f"Cannot list {root}: {exc}", root=root) from exc
    prefix = resource_type.folder_prefix
    directories = [
        entry for entry in entries if entry.is_directory and entry.name.startswith(prefix)
    ]
    return sorted(directories, key=lambda entry: entry.name)


async def _finish_rows(
    rows: Sequence[Row],
    documents: Sequence[EntityDocuments],
    *,
    portal_host: str,
) -> list[Row]:
    finished = await asyncio.gather(
        *(
            _finish_row(row, docs, portal_host=portal_host)
            for row, docs in zip(rows, documents, strict=True)
        )
    )
    return _drop_duplicate_keys(finished)


async def _finish_row(row: Row, documents: EntityDocuments, *, portal_host: str) -> Row:
    """Detect staleness, backfill activity timestamps and derive the URL."""

    is_stale = await documents.is_stale()

    last_sample_at = row.last_sample_at
    if last_sample_at is None:
        sample = await documents.sample()
        last_sample_at = sample.meta.sampled_at if sample and sample.meta else None

    last_details_at = row.last_details_at
    if last_details_at is None:
        details = await documents.details()
        last_details_at = details.meta.generated_at if details and details.meta else None

    last_analyze_at = row.last_analyze_at
    if last_analyze_at is None:
        analysis = await documents.analysis()
        last_analyze_at = analysis.meta.analyzed_at if analysis and analysis.meta else None

    last_overview_at = row.last_overview_at
    if last_overview_at is None:
        last_overview_at = await documents.modified_at(OVERVIEW_DOCUMENT)

    resource_url = row.resource_url or build_resource_url(
        row.folder_path, row.resource_type, portal_host=portal_host
    )

    return replace(
        row,
        is_stale=is_stale,
        last_sample_at=last_sample_at,
        last_details_at=last_details_at,
        last_analyze_at=last_analyze_at,
        last_overview_at=last_overview_at,
        resource_url=resource_url,
    )


def _drop_duplicate_keys(rows: Sequence[Row]) -> list[Row]:
    seen: set[str] = set()
    unique: list[Row] = []
    for row in rows:
        if row.key in seen:
            log.warning(f"Duplicate row key {row.key!r} at {row.folder_path}, keeping the first")
            continue
        seen.add(row.key)
        unique.append(row)
    return unique
