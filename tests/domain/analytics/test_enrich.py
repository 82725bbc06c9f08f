from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime

import pytest

from reviewdesk.domain.analytics import apply_dashboard_windows, enrich_dashboards
from reviewdesk.domain.analytics.enrich import DASHBOARD_PATH_PREFIX
from reviewdesk.domain.model import DashboardDetails, HealthStatus, ResourceType
from tests.support.clock import NOW, fixed_clock
from tests.support.rows import FakeAnalyticsFeed, make_row, make_window, page_view


def test_dashboards_receive_window_and_health() -> None:
    rows = [
        make_row("12", resource_type=ResourceType.DASHBOARD),
        make_row("13", resource_type=ResourceType.DASHBOARD),
        make_row("orders"),
    ]
    windows = {"12": make_window(12, 25, 40, last_viewed=date(2025, 6, 13))}

    enriched = apply_dashboard_windows(rows, windows, now=NOW)

    viewed = enriched[0].details
    assert isinstance(viewed, DashboardDetails)
    assert viewed.analytics is not None
    assert viewed.analytics.window == windows["12"]
    assert viewed.analytics.health.status is HealthStatus.ACTIVE

    unviewed = enriched[1].details
    assert isinstance(unviewed, DashboardDetails)
    assert unviewed.analytics is None
    assert enriched[2] is rows[2]


def test_enrichment_queries_dashboard_paths_of_the_domain() -> None:
    feed = FakeAnalyticsFeed([page_view("12", date(2025, 6, 14), 3)])
    rows = [make_row("12", resource_type=ResourceType.DASHBOARD)]

    enriched = asyncio.run(enrich_dashboards(rows, feed=feed, domain="acme", clock=fixed_clock()))

    assert feed.queries == [("acme", DASHBOARD_PATH_PREFIX)]
    details = enriched[0].details
    assert isinstance(details, DashboardDetails)
    assert details.analytics is not None
    assert details.analytics.window.views_7d == 3


def test_feed_failure_leaves_rows_without_analytics(caplog: pytest.LogCaptureFixture) -> None:
    feed = FakeAnalyticsFeed(error=ConnectionError("feed offline"))
    rows = [make_row("12", resource_type=ResourceType.DASHBOARD)]

    with caplog.at_level(logging.WARNING):
        enriched = asyncio.run(
            enrich_dashboards(rows, feed=feed, domain="acme", clock=fixed_clock())
        )

    assert enriched == rows
    assert "feed offline" in caplog.text


def test_feed_failure_clears_previous_analytics() -> None:
    windows = {"12": make_window(5, 5, 5, last_viewed=date(2025, 6, 14))}
    rows = apply_dashboard_windows(
        [make_row("12", resource_type=ResourceType.DASHBOARD)], windows, now=NOW
    )
    feed = FakeAnalyticsFeed(error=ConnectionError("feed offline"))

    enriched = asyncio.run(enrich_dashboards(rows, feed=feed, domain="acme", clock=fixed_clock()))

    details = enriched[0].details
    assert isinstance(details, DashboardDetails)
    assert details.analytics is None


def test_enrichment_reads_the_clock_once() -> None:
    reads: list[datetime] = []

    def clock() -> datetime:
        reads.append(NOW)
        return NOW

    feed = FakeAnalyticsFeed(
        [page_view("12", date(2025, 6, 14), 3), page_view("13", date(2025, 5, 1), 1)]
    )
    rows = [
        make_row("12", resource_type=ResourceType.DASHBOARD),
        make_row("13", resource_type=ResourceType.DASHBOARD),
    ]

    asyncio.run(enrich_dashboards(rows, feed=feed, domain="acme", clock=clock))

    assert reads == [NOW]
