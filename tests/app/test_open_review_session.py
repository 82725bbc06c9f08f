from __future__ import annotations

import asyncio
from datetime import date

import pytest

from reviewdesk.adapters.analytics import AnalyticsFeedClient
from reviewdesk.app import build_analytics_feed, export_portal_resources, open_review_session
from reviewdesk.config import ReviewConfig
from reviewdesk.domain.model import DashboardDetails, ResourceType
from tests.support.metadata_store import ROOT, FakeMetadataStore
from tests.support.rows import FakeAnalyticsFeed, page_view


def _dashboards(store: FakeMetadataStore) -> None:
    store.add_entity(
        "dashboard_12",
        {
            "definition.json": {"id": 12, "name": "Sales"},
            "definition_analysis.json": {"includeSitemap": True, "sitemapGroup1": "Reports"},
        },
    )
    store.add_entity("dashboard_13", {"definition.json": {"id": 13, "name": "Ops"}})


def test_session_is_loaded_on_open(store: FakeMetadataStore) -> None:
    _dashboards(store)
    feed = FakeAnalyticsFeed([page_view("12", date.today(), 4)])

    session = asyncio.run(
        open_review_session(ROOT, "dashboard", store=store, feed=feed, load_env=False)
    )

    assert session.source.resource_type is ResourceType.DASHBOARD
    rows = {row.key: row for row in session.merged_rows()}
    assert set(rows) == {"12", "13"}
    details = rows["12"].details
    assert isinstance(details, DashboardDetails)
    assert details.analytics is not None


def test_portal_host_comes_from_review_config(store: FakeMetadataStore) -> None:
    _dashboards(store)

    session = asyncio.run(
        open_review_session(
            ROOT,
            ResourceType.DASHBOARD,
            store=store,
            review_config=ReviewConfig(portal_host="portal.example"),
            load_env=False,
        )
    )

    urls = sorted(row.resource_url or "" for row in session.merged_rows())
    assert urls == [
        "https://acme.portal.example/dashboard/private/12",
        "https://acme.portal.example/dashboard/private/13",
    ]


def test_export_portal_resources(store: FakeMetadataStore) -> None:
    _dashboards(store)
    session = asyncio.run(
        open_review_session(ROOT, ResourceType.DASHBOARD, store=store, load_env=False)
    )

    resources = export_portal_resources(session)

    assert [(resource.resource_id, resource.sitemap_group2) for resource in resources] == [
        ("dashboard_12", "Reports")
    ]
    assert resources[0].domain == "acme"


def test_analytics_feed_requires_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    assert build_analytics_feed() is None

    monkeypatch.setenv("ANALYTICS_FEED_URL", "https://feed.example")
    monkeypatch.setenv("ANALYTICS_FEED_KEY", "secret")

    feed = build_analytics_feed()

    assert isinstance(feed, AnalyticsFeedClient)
    assert feed.config.base_url == "https://feed.example"


def test_unknown_resource_type_is_rejected(store: FakeMetadataStore) -> None:
    with pytest.raises(ValueError, match="report"):
        asyncio.run(open_review_session(ROOT, "report", store=store, load_env=False))
