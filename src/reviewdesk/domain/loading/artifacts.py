"""Build query, dashboard and workflow rows from their directories."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from reviewdesk.domain.model import (
    DashboardDetails,
    QueryDetails,
    ResourceType,
    Row,
    WorkflowDetails,
)

if TYPE_CHECKING:
    from reviewdesk.domain.model import RowDetails
    from reviewdesk.domain.ports.metadata import DirectoryEntry

    from .documents import EntityDocuments
    from .schema import AnalysisDocument, DefinitionDocument


def artifact_key(definition: DefinitionDocument | None, folder_name: str) -> str:
    """Key rule for artifacts: a recorded definition id wins over the folder."""

    if definition is not None and definition.id is not None:
        return str(definition.id)
    return folder_name


def _empty_details(resource_type: ResourceType) -> RowDetails:
    match resource_type:
        case ResourceType.QUERY:
            return QueryDetails()
        case ResourceType.DASHBOARD:
            return DashboardDetails()
        case ResourceType.WORKFLOW:
            return WorkflowDetails()
        case ResourceType.TABLE:
            raise ValueError("Tables are not artifacts")


def _details_from_definition(
    resource_type: ResourceType, definition: DefinitionDocument
) -> RowDetails:
    match resource_type:
        case ResourceType.QUERY:
            table_info = definition.table_info
            return QueryDetails(
                category=definition.category,
                table_name=table_info.name if table_info else None,
                field_count=(
                    len(table_info.fields) if table_info and table_info.fields is not None else None
                ),
            )
        case ResourceType.DASHBOARD:
            return DashboardDetails(
                category=definition.category,
                widget_count=len(definition.widgets) if definition.widgets is not None else None,
                creator_name=definition.created_by,
            )
        case ResourceType.WORKFLOW:
            return WorkflowDetails(
                is_scheduled=bool(definition.cron_expression),
                cron_expression=definition.cron_expression,
                plugin_count=definition.plugin_count,
                description=definition.description,
            )
        case ResourceType.TABLE:
            raise ValueError("Tables are not artifacts")


def _apply_analysis(row: Row, analysis: AnalysisDocument) -> Row:
    return replace(
        row,
        data_type=analysis.artifact_data_type,
        data_category=analysis.data_category,
        data_sub_category=analysis.data_sub_category,
        usage_status=analysis.usage_status,
        action=analysis.action,
        data_source=analysis.data_source,
        source_system=analysis.source_system,
        tags=analysis.tags,
        suggested_name=analysis.suggested_name,
        summary_short=analysis.summary.short if analysis.summary else None,
        summary_full=analysis.summary.full if analysis.summary else None,
        include_sitemap=analysis.include_sitemap,
        sitemap_group1=analysis.sitemap_group1,
        sitemap_group2=analysis.sitemap_group2,
        solution=analysis.solution,
        resource_url=analysis.resource_url,
        last_analyze_at=analysis.meta.analyzed_at if analysis.meta else None,
    )


async def row_from_artifact_directory(
    documents: EntityDocuments,
    entry: DirectoryEntry,
    resource_type: ResourceType,
) -> Row:
    definition = await documents.definition()
    analysis = await documents.analysis()

    row = Row(
        key=artifact_key(definition, entry.name),
        name=entry.name,
        display_name=None,
        folder_name=entry.name,
        folder_path=entry.path,
        details=_empty_details(resource_type),
    )
    if definition is not None:
        label = definition.name or definition.display_name or entry.name
        row = replace(
            row,
            name=label,
            display_name=label,
            created_date=definition.created_date,
            updated_date=definition.updated_date,
            details=_details_from_definition(resource_type, definition),
        )
    if analysis is not None:
        row = _apply_analysis(row, analysis)
    return row
