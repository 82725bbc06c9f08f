"""Row builders for tests that do not need the loader."""

from __future__ import annotations

from datetime import date

from reviewdesk.domain.model import (
    AnalyticsWindow,
    DashboardDetails,
    QueryDetails,
    ResourceType,
    Row,
    RowDetails,
    TableDetails,
    WorkflowDetails,
)
from reviewdesk.domain.ports.analytics import PageViewEvent

_DETAILS: dict[ResourceType, type[RowDetails]] = {
    ResourceType.TABLE: TableDetails,
    ResourceType.QUERY: QueryDetails,
    ResourceType.DASHBOARD: DashboardDetails,
    ResourceType.WORKFLOW: WorkflowDetails,
}


def make_row(
    key: str,
    *,
    resource_type: ResourceType = ResourceType.TABLE,
    **fields: object,
) -> Row:
    folder_name = str(fields.pop("folder_name", key))
    return Row(
        key=key,
        name=str(fields.pop("name", key)),
        display_name=fields.pop("display_name", None),  # type: ignore[arg-type]
        folder_name=folder_name,
        folder_path=str(fields.pop("folder_path", f"/data/domains/prod/acme/{folder_name}")),
        details=fields.pop("details", None) or _DETAILS[resource_type](),  # type: ignore[arg-type]
        **fields,  # type: ignore[arg-type]
    )


def make_window(
    views_7d: int = 0,
    views_30d: int = 0,
    views_90d: int = 0,
    *,
    last_viewed: date | None = None,
    users_30d: int | None = None,
) -> AnalyticsWindow:
    return AnalyticsWindow(
        views_7d=views_7d,
        views_30d=views_30d,
        views_90d=views_90d,
        users_30d=users_30d,
        last_viewed=last_viewed,
    )


class FakeAnalyticsFeed:
    def __init__(
        self,
        events: list[PageViewEvent] | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.events = list(events or [])
        self.error = error
        self.queries: list[tuple[str, str]] = []

    async def query(self, domain: str, path_prefix: str) -> list[PageViewEvent]:
        self.queries.append((domain, path_prefix))
        if self.error is not None:
            raise self.error
        return list(self.events)


def page_view(
    entity_ref: str,
    view_date: date,
    views: int = 1,
    *,
    user_id: str | None = None,
    is_internal: bool = False,
) -> PageViewEvent:
    return PageViewEvent(
        entity_ref=entity_ref,
        view_date=view_date,
        views=views,
        user_id=user_id,
        is_internal=is_internal,
    )
