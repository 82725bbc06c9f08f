from __future__ import annotations

from reviewdesk.domain.model import ResourceType
from reviewdesk.domain.review import PortalResource, portal_resources
from tests.support.rows import make_row


def test_only_sitemap_rows_with_a_group_are_exported() -> None:
    rows = [
        make_row(
            "orders",
            display_name="Orders",
            include_sitemap=True,
            sitemap_group1="Sales",
            summary_short="All orders",
            solution="Commerce",
            resource_url="https://acme.thinkval.io",
        ),
        make_row("drafts", include_sitemap=True),
        make_row("hidden", sitemap_group1="Sales"),
    ]

    resources = portal_resources(rows, domain="acme", resource_type=ResourceType.TABLE)

    assert resources == [
        PortalResource(
            domain="acme",
            resource_id="orders",
            name="Orders",
            description="All orders",
            resource_type=ResourceType.TABLE,
            resource_url="https://acme.thinkval.io",
            sitemap_group1="Sales",
            sitemap_group2="Sales",
            solution="Commerce",
        )
    ]


def test_artifacts_are_identified_by_folder() -> None:
    rows = [
        make_row(
            "12",
            resource_type=ResourceType.DASHBOARD,
            name="Sales",
            folder_name="dashboard_12",
            include_sitemap=True,
            sitemap_group1="Reports",
            sitemap_group2="Monthly",
        )
    ]

    (resource,) = portal_resources(rows, domain="acme", resource_type=ResourceType.DASHBOARD)

    assert resource.resource_id == "dashboard_12"
    assert resource.name == "Sales"
    assert resource.sitemap_group2 == "Monthly"
