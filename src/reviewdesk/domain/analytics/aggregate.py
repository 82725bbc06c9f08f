"""Aggregate raw page-view events into per-entity trailing windows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from reviewdesk.domain.model import AnalyticsWindow
from reviewdesk.domain.time_windows import TimeWindow, start_of_day

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime

    from reviewdesk.domain.ports.analytics import PageViewEvent

WINDOW_DAYS: Final[tuple[int, int, int]] = (7, 30, 90)


@dataclass(slots=True)
class _Accumulator:
    views_7d: int = 0
    views_30d: int = 0
    views_90d: int = 0
    users_30d: set[str] = field(default_factory=set[str])
    last_viewed: date | None = None

    def freeze(self) -> AnalyticsWindow:
        return AnalyticsWindow(
            views_7d=self.views_7d,
            views_30d=self.views_30d,
            views_90d=self.views_90d,
            users_30d=len(self.users_30d) or None,
            last_viewed=self.last_viewed,
        )


def _window_starts(now: datetime) -> tuple[datetime, datetime, datetime]:
    starts: list[datetime] = []
    for days in WINDOW_DAYS:
        start, _end = TimeWindow.trailing_days(days, end=now).resolve()
        if start is None:
            raise ValueError("Trailing window did not resolve a start")
        starts.append(start)
    return starts[0], starts[1], starts[2]


def aggregate_page_views(
    events: Iterable[PageViewEvent],
    *,
    now: datetime,
) -> dict[str, AnalyticsWindow]:
    """Sum views into 7/30/90-day windows per entity, anchored at ``now``.

    A day counts towards a window when its UTC midnight is no older than the
    window start. Distinct users are only collected inside the 30-day window;
    the last-viewed date is the most recent day with a non-zero count.
    """

    start_7d, start_30d, start_90d = _window_starts(now)
    totals: dict[str, _Accumulator] = {}

    for event in events:
        if event.is_internal:
            continue
        entry = totals.setdefault(event.entity_ref, _Accumulator())
        viewed_at = start_of_day(event.view_date)

        if viewed_at >= start_7d:
            entry.views_7d += event.views
        if viewed_at >= start_30d:
            entry.views_30d += event.views
            if event.user_id:
                entry.users_30d.add(event.user_id)
        if viewed_at >= start_90d:
            entry.views_90d += event.views

        if event.views > 0 and (entry.last_viewed is None or event.view_date > entry.last_viewed):
            entry.last_viewed = event.view_date

    return {ref: accumulator.freeze() for ref, accumulator in totals.items()}
