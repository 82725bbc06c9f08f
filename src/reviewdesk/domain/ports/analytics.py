"""Port for the external page-view analytics feed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True, kw_only=True)
class PageViewEvent:
    """Daily view count of one entity, as reported by the feed."""

    entity_ref: str
    view_date: date
    views: int
    user_id: str | None = None
    is_internal: bool = False


@runtime_checkable
class AnalyticsFeed(Protocol):
    """Query page views for one domain, pre-filtered to external traffic."""

    async def query(self, domain: str, path_prefix: str) -> list[PageViewEvent]: ...


__all__ = ["AnalyticsFeed", "PageViewEvent"]
