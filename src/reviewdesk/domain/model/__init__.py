"""Domain model for catalog review rows."""

from __future__ import annotations

from .analytics import AnalyticsWindow, DashboardAnalytics, HealthScore
from .enums import HealthStatus, ResourceType, ReviewMode
from .rows import (
    EDITABLE_FIELDS,
    DashboardDetails,
    QueryDetails,
    Row,
    RowDetails,
    TableDetails,
    WorkflowDetails,
    row_fields,
)

__all__ = [
    "EDITABLE_FIELDS",
    "AnalyticsWindow",
    "DashboardAnalytics",
    "DashboardDetails",
    "HealthScore",
    "HealthStatus",
    "QueryDetails",
    "ResourceType",
    "ReviewMode",
    "Row",
    "RowDetails",
    "TableDetails",
    "WorkflowDetails",
    "row_fields",
]
