"""Canonical review rows.

A ``Row`` carries the fields every reviewable entity shares and one
resource-specific payload in ``details``. The payload class is the tag: a
table row holds ``TableDetails``, a dashboard row ``DashboardDetails`` and so
on, so a field that is meaningless for a resource type simply does not exist
on its row.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, ClassVar, Final

from .enums import ResourceType

if TYPE_CHECKING:
    from .analytics import DashboardAnalytics


@dataclass(frozen=True, slots=True, kw_only=True)
class TableDetails:
    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.TABLE

    has_overview: bool = False
    column_count: int | None = None
    calculated_column_count: int | None = None
    row_count: int | None = None
    table_type: str | None = None
    days_since_created: int | None = None
    days_since_update: int | None = None
    workflow_count: int | None = None
    scheduled_workflow_count: int | None = None
    query_count: int | None = None
    dashboard_count: int | None = None
    space: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class QueryDetails:
    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.QUERY

    category: str | None = None
    table_name: str | None = None
    field_count: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DashboardDetails:
    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.DASHBOARD

    category: str | None = None
    widget_count: int | None = None
    creator_name: str | None = None
    analytics: DashboardAnalytics | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class WorkflowDetails:
    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.WORKFLOW

    is_scheduled: bool | None = None
    cron_expression: str | None = None
    plugin_count: int | None = None
    description: str | None = None


type RowDetails = TableDetails | QueryDetails | DashboardDetails | WorkflowDetails


@dataclass(frozen=True, slots=True, kw_only=True)
class Row:
    """One reviewable catalog entity as loaded from the metadata store."""

    key: str
    name: str
    display_name: str | None
    folder_name: str
    folder_path: str
    details: RowDetails
    is_stale: bool = False

    # classification
    data_type: str | None = None
    data_category: str | None = None
    data_sub_category: str | None = None
    usage_status: str | None = None
    action: str | None = None
    data_source: str | None = None
    source_system: str | None = None
    tags: str | None = None
    suggested_name: str | None = None
    summary_short: str | None = None
    summary_full: str | None = None

    # portal publishing
    include_sitemap: bool = False
    sitemap_group1: str | None = None
    sitemap_group2: str | None = None
    solution: str | None = None
    resource_url: str | None = None

    # activity
    created_date: str | None = None
    updated_date: str | None = None
    last_sample_at: str | None = None
    last_details_at: str | None = None
    last_analyze_at: str | None = None
    last_overview_at: str | None = None

    @property
    def resource_type(self) -> ResourceType:
        return self.details.RESOURCE_TYPE

    @property
    def label(self) -> str:
        return self.display_name or self.name


EDITABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "data_type",
        "data_category",
        "data_sub_category",
        "usage_status",
        "action",
        "data_source",
        "source_system",
        "tags",
        "suggested_name",
        "summary_short",
        "summary_full",
        "include_sitemap",
        "sitemap_group1",
        "sitemap_group2",
        "solution",
        "resource_url",
    }
)

_COMMON_FIELDS: Final[tuple[str, ...]] = tuple(
    field.name for field in fields(Row) if field.name != "details"
)


def row_fields(row: Row) -> dict[str, object]:
    """Flatten a row into ``field -> value`` including its payload fields."""

    values: dict[str, object] = {name: getattr(row, name) for name in _COMMON_FIELDS}
    for field in fields(row.details):
        values[field.name] = getattr(row.details, field.name)
    return values
