"""Attach engagement analytics to dashboard rows."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING, Final

from reviewdesk.domain.errors import AnalyticsUnavailable
from reviewdesk.domain.model import DashboardAnalytics, DashboardDetails
from reviewdesk.domain.time_windows import utcnow

from .aggregate import aggregate_page_views
from .health import compute_health

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime

    from reviewdesk.domain.model import AnalyticsWindow, Row
    from reviewdesk.domain.ports.analytics import AnalyticsFeed
    from reviewdesk.domain.time_windows import Clock

log = getLogger(__name__)

DASHBOARD_PATH_PREFIX: Final[str] = "/dashboard/"


async def fetch_dashboard_windows(
    feed: AnalyticsFeed,
    domain: str,
    *,
    now: datetime,
) -> dict[str, AnalyticsWindow]:
    try:
        events = await feed.query(domain, DASHBOARD_PATH_PREFIX)
        return aggregate_page_views(events, now=now)
    except Exception as exc:  # noqa: BLE001
        raise AnalyticsUnavailable(f"Analytics feed failed for {domain}: {exc}") from exc


def apply_dashboard_windows(
    rows: Sequence[Row],
    windows: Mapping[str, AnalyticsWindow],
    *,
    now: datetime,
) -> list[Row]:
    """Return ``rows`` with analytics set on every dashboard.

    Dashboards without a window end up with ``analytics=None``.
    """

    enriched: list[Row] = []
    for row in rows:
        details = row.details
        if not isinstance(details, DashboardDetails):
            enriched.append(row)
            continue
        window = windows.get(row.key)
        analytics = (
            DashboardAnalytics(window=window, health=compute_health(window, now=now))
            if window is not None
            else None
        )
        if analytics == details.analytics:
            enriched.append(row)
            continue
        enriched.append(replace(row, details=replace(details, analytics=analytics)))
    return enriched


async def enrich_dashboards(
    rows: Sequence[Row],
    *,
    feed: AnalyticsFeed,
    domain: str,
    clock: Clock = utcnow,
) -> list[Row]:
    """Enrich dashboard rows from ``feed``; a feed failure leaves dashboards without analytics."""

    now = clock()
    try:
        windows = await fetch_dashboard_windows(feed, domain, now=now)
    except AnalyticsUnavailable as exc:
        log.warning(f"{exc}; showing dashboards without analytics")
        return apply_dashboard_windows(rows, {}, now=now)
    log.info(f"Aggregated analytics for {len(windows)} dashboards in {domain}")
    return apply_dashboard_windows(rows, windows, now=now)
