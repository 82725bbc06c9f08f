"""Build table rows from the data-models index or from table directories."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Final

from reviewdesk.domain.errors import DocumentMalformed, DocumentMissing
from reviewdesk.domain.model import ResourceType, Row, TableDetails

from .documents import OVERVIEW_DOCUMENT, EntityDocuments, join_path, read_model
from .schema import TablesIndexDocument

if TYPE_CHECKING:
    from reviewdesk.domain.ports.metadata import DirectoryEntry, MetadataStore

    from .schema import IndexTableEntry

log = getLogger(__name__)

TABLES_INDEX_DOCUMENT: Final[str] = "data-models-index.json"
TABLE_PREFIX: Final[str] = ResourceType.TABLE.folder_prefix


async def read_tables_index(store: MetadataStore, root: str) -> list[IndexTableEntry] | None:
    """Return the index entries, or ``None`` when the index cannot be used."""

    path = join_path(root, TABLES_INDEX_DOCUMENT)
    try:
        index = await read_model(store, path, TablesIndexDocument)
    except DocumentMissing:
        log.debug(f"No tables index at {path}, scanning directories")
        return None
    except DocumentMalformed as exc:
        log.warning(f"{exc}; scanning directories")
        return None
    if not index.tables:
        log.info(f"Tables index at {path} is empty, scanning directories")
        return None
    return index.tables


def row_from_index_entry(root: str, entry: IndexTableEntry) -> Row:
    folder_path = join_path(root, f"{TABLE_PREFIX}{entry.name}")
    return Row(
        key=entry.name,
        name=entry.name,
        display_name=entry.display_name or entry.suggested_name or entry.name,
        folder_name=entry.name,
        folder_path=folder_path,
        data_type=entry.data_type,
        data_category=entry.data_category,
        data_sub_category=entry.data_sub_category,
        usage_status=entry.usage_status,
        action=entry.action,
        data_source=entry.data_source,
        source_system=entry.source_system,
        tags=entry.tags,
        suggested_name=entry.suggested_name,
        summary_short=entry.summary_short,
        summary_full=entry.summary_full,
        include_sitemap=entry.include_sitemap,
        sitemap_group1=entry.sitemap_group1,
        sitemap_group2=entry.sitemap_group2,
        solution=entry.solution,
        resource_url=entry.resource_url,
        last_sample_at=entry.last_sample_at,
        last_details_at=entry.last_details_at,
        last_analyze_at=entry.last_analyze_at,
        last_overview_at=entry.last_overview_at,
        details=TableDetails(
            has_overview=entry.has_overview,
            column_count=entry.column_count,
            calculated_column_count=entry.calculated_column_count,
            row_count=entry.row_count,
            table_type=entry.table_type,
            days_since_created=entry.days_since_created,
            days_since_update=entry.days_since_update,
            workflow_count=entry.workflow_count,
            scheduled_workflow_count=entry.scheduled_workflow_count,
            query_count=entry.query_count,
            dashboard_count=entry.dashboard_count,
            space=entry.space,
        ),
    )


async def row_from_table_directory(documents: EntityDocuments, entry: DirectoryEntry) -> Row:
    """Reconstruct a table row from the documents inside its directory."""

    table_name = entry.name.removeprefix(TABLE_PREFIX)
    details_doc = await documents.details()
    sample_doc = await documents.sample()
    analysis = await documents.analysis()
    has_overview = await documents.has(OVERVIEW_DOCUMENT)

    details = TableDetails(has_overview=has_overview)
    display_name: str | None = None
    last_details_at: str | None = None
    if details_doc is not None:
        meta = details_doc.meta
        if meta is not None:
            display_name = meta.display_name
            last_details_at = meta.generated_at
        column_count, calculated_count = details_doc.column_counts()
        relationships = details_doc.relationships
        health = details_doc.health
        details = replace(
            details,
            table_type=meta.table_type if meta else None,
            days_since_created=health.days_since_created if health else None,
            days_since_update=health.days_since_update if health else None,
            column_count=column_count,
            calculated_column_count=calculated_count,
            workflow_count=(
                len(relationships.workflows)
                if relationships and relationships.workflows is not None
                else None
            ),
            scheduled_workflow_count=(
                relationships.scheduled_workflow_count if relationships else None
            ),
            query_count=(
                len(relationships.queries)
                if relationships and relationships.queries is not None
                else None
            ),
            dashboard_count=(
                len(relationships.dashboards)
                if relationships and relationships.dashboards is not None
                else None
            ),
        )

    last_sample_at: str | None = None
    if sample_doc is not None and sample_doc.meta is not None:
        last_sample_at = sample_doc.meta.sampled_at
        if sample_doc.meta.total_row_count is not None:
            details = replace(details, row_count=sample_doc.meta.total_row_count)

    row = Row(
        key=table_name,
        name=table_name,
        display_name=display_name or table_name,
        folder_name=table_name,
        folder_path=entry.path,
        last_details_at=last_details_at,
        last_sample_at=last_sample_at,
        details=details,
    )
    if analysis is None:
        return row
    return replace(
        row,
        display_name=display_name or analysis.suggested_name or table_name,
        suggested_name=analysis.suggested_name,
        data_type=analysis.table_data_type,
        summary_short=analysis.summary.short if analysis.summary else None,
        summary_full=analysis.summary.full if analysis.summary else None,
        last_analyze_at=analysis.meta.analyzed_at if analysis.meta else None,
        data_category=analysis.data_category,
        data_sub_category=analysis.data_sub_category,
        data_source=analysis.data_source,
        usage_status=analysis.usage_status,
        action=analysis.action,
        tags=analysis.tags,
        source_system=analysis.source_system,
        include_sitemap=analysis.include_sitemap,
        sitemap_group1=analysis.sitemap_group1,
        sitemap_group2=analysis.sitemap_group2,
        solution=analysis.solution,
        resource_url=analysis.resource_url,
    )
