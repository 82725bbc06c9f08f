"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ResourceType(StrEnum):
    """Discriminator for the four kinds of reviewable catalog entities."""

    TABLE = "table"
    QUERY = "query"
    DASHBOARD = "dashboard"
    WORKFLOW = "workflow"

    @property
    def folder_prefix(self) -> str:
        return f"{self.value}_"

    @property
    def is_artifact(self) -> bool:
        return self is not ResourceType.TABLE


class HealthStatus(StrEnum):
    UNUSED = "unused"
    DEAD = "dead"
    STALE = "stale"
    DECLINING = "declining"
    ACTIVE = "active"


class ReviewMode(StrEnum):
    """Review-mode predicate selected in the presentation layer."""

    ALL = "all"
    NEEDS_REVIEW = "needs-review"
    MODIFIED = "modified"
    DELETED = "deleted"
