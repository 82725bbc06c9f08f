"""Pydantic models describing the per-entity metadata documents."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

log = getLogger(__name__)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _tags_to_text(value: object) -> object:
    if isinstance(value, list):
        parts = [str(item).strip() for item in value if str(item).strip()]
        return ", ".join(parts) or None
    return _blank_to_none(value)


def _is_calculated(column: object) -> bool:
    if not isinstance(column, Mapping):
        return False
    return bool(column.get("formula")) or column.get("isCalculated") is True


def _is_scheduled(workflow: object) -> bool:
    return isinstance(workflow, Mapping) and workflow.get("scheduled") is True


class DocumentModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --- definition_analysis.json -------------------------------------------------


class AnalysisMeta(DocumentModel):
    analyzed_at: str | None = Field(default=None, alias="analyzedAt")

    _normalize = field_validator("analyzed_at", mode="before")(_blank_to_none)


class AnalysisClassification(DocumentModel):
    data_type: str | None = Field(default=None, alias="dataType")

    _normalize = field_validator("data_type", mode="before")(_blank_to_none)


class AnalysisSummary(DocumentModel):
    short: str | None = None
    full: str | None = None

    _normalize = field_validator("short", "full", mode="before")(_blank_to_none)


class AnalysisDocument(DocumentModel):
    suggested_name: str | None = Field(default=None, alias="suggestedName")
    data_type: str | None = Field(default=None, alias="dataType")
    classification: AnalysisClassification | None = None
    summary: AnalysisSummary | None = None
    meta: AnalysisMeta | None = None
    data_category: str | None = Field(default=None, alias="dataCategory")
    data_sub_category: str | None = Field(default=None, alias="dataSubCategory")
    data_source: str | None = Field(default=None, alias="dataSource")
    source_system: str | None = Field(default=None, alias="sourceSystem")
    usage_status: str | None = Field(default=None, alias="usageStatus")
    action: str | None = None
    tags: str | None = None
    include_sitemap: bool = Field(default=False, alias="includeSitemap")
    sitemap_group1: str | None = Field(default=None, alias="sitemapGroup1")
    sitemap_group2: str | None = Field(default=None, alias="sitemapGroup2")
    solution: str | None = None
    resource_url: str | None = Field(default=None, alias="resourceUrl")

    _normalize = field_validator(
        "suggested_name",
        "data_type",
        "data_category",
        "data_sub_category",
        "data_source",
        "source_system",
        "usage_status",
        "action",
        "sitemap_group1",
        "sitemap_group2",
        "solution",
        "resource_url",
        mode="before",
    )(_blank_to_none)
    _normalize_tags = field_validator("tags", mode="before")(_tags_to_text)

    @field_validator("include_sitemap", mode="before")
    @classmethod
    def _strict_true(cls, value: object) -> bool:
        return value is True

    @property
    def classified_data_type(self) -> str | None:
        return self.classification.data_type if self.classification else None

    @property
    def table_data_type(self) -> str | None:
        """Data type as table scans read it: the top-level key wins."""
        return self.data_type or self.classified_data_type

    @property
    def artifact_data_type(self) -> str | None:
        """Data type as artifact loading reads it: the classification wins."""
        return self.classified_data_type or self.data_type


# --- definition_sample.json ---------------------------------------------------


class SampleMeta(DocumentModel):
    sampled_at: str | None = Field(default=None, alias="sampledAt")
    total_row_count: int | None = Field(default=None, alias="totalRowCount")

    _normalize = field_validator("sampled_at", mode="before")(_blank_to_none)


class SampleDocument(DocumentModel):
    meta: SampleMeta | None = None


# --- definition_details.json --------------------------------------------------


class DetailsMeta(DocumentModel):
    display_name: str | None = Field(default=None, alias="displayName")
    table_type: str | None = Field(default=None, alias="tableType")
    generated_at: str | None = Field(default=None, alias="generatedAt")

    _normalize = field_validator(
        "display_name", "table_type", "generated_at", mode="before"
    )(_blank_to_none)


class DetailsHealth(DocumentModel):
    days_since_created: int | None = Field(default=None, alias="daysSinceCreated")
    days_since_update: int | None = Field(default=None, alias="daysSinceUpdate")


class GroupedColumns(DocumentModel):
    system: list[Any] = Field(default_factory=list)
    data: list[Any] = Field(default_factory=list)
    custom: list[Any] = Field(default_factory=list)
    calculated: list[Any] = Field(default_factory=list)


class DetailsRelationships(DocumentModel):
    workflows: list[Any] | None = None
    queries: list[Any] | None = None
    dashboards: list[Any] | None = None

    @property
    def scheduled_workflow_count(self) -> int | None:
        if self.workflows is None:
            return None
        return sum(1 for workflow in self.workflows if _is_scheduled(workflow))


class DetailsDocument(DocumentModel):
    meta: DetailsMeta | None = None
    health: DetailsHealth | None = None
    columns: list[Any] | GroupedColumns | None = None
    relationships: DetailsRelationships | None = None

    def column_counts(self) -> tuple[int | None, int | None]:
        """Return ``(total, calculated)`` column counts."""

        columns = self.columns
        if columns is None:
            return None, None
        if isinstance(columns, list):
            return len(columns), sum(1 for column in columns if _is_calculated(column))
        data_columns = len(columns.data) or len(columns.custom)
        calculated = len(columns.calculated)
        return len(columns.system) + data_columns + calculated, calculated


# --- definition.json ----------------------------------------------------------


class TableInfo(DocumentModel):
    name: str | None = None
    fields: list[Any] | None = None


class QueryInfo(DocumentModel):
    table_info: TableInfo | None = Field(default=None, alias="tableInfo")


class Datasource(DocumentModel):
    query_info: QueryInfo | None = Field(default=None, alias="queryInfo")


class WorkflowBody(DocumentModel):
    plugins: list[Any] | None = None


class WorkflowData(DocumentModel):
    workflow: WorkflowBody | None = None


class DefinitionDocument(DocumentModel):
    id: int | str | None = None
    name: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    created_date: str | None = None
    updated_date: str | None = None
    category: str | None = None
    datasource: Datasource | None = None
    widgets: list[Any] | None = None
    created_by: str | None = None
    cron_expression: str | None = None
    description: str | None = None
    data: WorkflowData | None = None

    _normalize = field_validator(
        "name",
        "display_name",
        "created_date",
        "updated_date",
        "category",
        "created_by",
        "cron_expression",
        "description",
        mode="before",
    )(_blank_to_none)

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: object) -> object:
        return _blank_to_none(value)

    @property
    def table_info(self) -> TableInfo | None:
        if self.datasource and self.datasource.query_info:
            return self.datasource.query_info.table_info
        return None

    @property
    def plugin_count(self) -> int | None:
        if self.data and self.data.workflow and self.data.workflow.plugins is not None:
            return len(self.data.workflow.plugins)
        return None


# --- data-models-index.json ---------------------------------------------------


class IndexTableEntry(DocumentModel):
    name: str
    display_name: str | None = Field(default=None, alias="displayName")
    data_type: str | None = Field(default=None, alias="dataType")
    data_category: str | None = Field(default=None, alias="dataCategory")
    data_sub_category: str | None = Field(default=None, alias="dataSubCategory")
    usage_status: str | None = Field(default=None, alias="usageStatus")
    action: str | None = None
    data_source: str | None = Field(default=None, alias="dataSource")
    source_system: str | None = Field(default=None, alias="sourceSystem")
    tags: str | None = None
    suggested_name: str | None = Field(default=None, alias="suggestedName")
    summary_short: str | None = Field(default=None, alias="summaryShort")
    summary_full: str | None = Field(default=None, alias="summaryFull")
    include_sitemap: bool = Field(default=False, alias="includeSitemap")
    sitemap_group1: str | None = Field(default=None, alias="sitemapGroup1")
    sitemap_group2: str | None = Field(default=None, alias="sitemapGroup2")
    solution: str | None = None
    resource_url: str | None = Field(default=None, alias="resourceUrl")
    has_overview: bool = Field(default=False, alias="hasOverview")
    column_count: int | None = Field(default=None, alias="columnCount")
    calculated_column_count: int | None = Field(default=None, alias="calculatedColumnCount")
    row_count: int | None = Field(default=None, alias="rowCount")
    table_type: str | None = Field(default=None, alias="tableType")
    days_since_created: int | None = Field(default=None, alias="daysSinceCreated")
    days_since_update: int | None = Field(default=None, alias="daysSinceUpdate")
    workflow_count: int | None = Field(default=None, alias="workflowCount")
    scheduled_workflow_count: int | None = Field(default=None, alias="scheduledWorkflowCount")
    query_count: int | None = Field(default=None, alias="queryCount")
    dashboard_count: int | None = Field(default=None, alias="dashboardCount")
    last_sample_at: str | None = Field(default=None, alias="lastSampleAt")
    last_details_at: str | None = Field(default=None, alias="lastDetailsAt")
    last_analyze_at: str | None = Field(default=None, alias="lastAnalyzeAt")
    last_overview_at: str | None = Field(default=None, alias="lastOverviewAt")
    space: str | None = None

    _normalize = field_validator(
        "display_name",
        "data_type",
        "data_category",
        "data_sub_category",
        "usage_status",
        "action",
        "data_source",
        "source_system",
        "suggested_name",
        "summary_short",
        "summary_full",
        "sitemap_group1",
        "sitemap_group2",
        "solution",
        "resource_url",
        "table_type",
        "last_sample_at",
        "last_details_at",
        "last_analyze_at",
        "last_overview_at",
        "space",
        mode="before",
    )(_blank_to_none)
    _normalize_tags = field_validator("tags", mode="before")(_tags_to_text)

    @field_validator("include_sitemap", "has_overview", mode="before")
    @classmethod
    def _strict_true(cls, value: object) -> bool:
        return value is True


class TablesIndexDocument(DocumentModel):
    tables: list[IndexTableEntry] = Field(default_factory=list)

    @field_validator("tables", mode="before")
    @classmethod
    def _skip_malformed_entries(cls, value: object) -> object:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        entries: list[IndexTableEntry] = []
        for position, raw in enumerate(value):
            try:
                entries.append(IndexTableEntry.model_validate(raw))
            except ValidationError as exc:
                log.warning(f"Skipping tables index entry {position}: {exc.error_count()} error(s)")
        return entries
