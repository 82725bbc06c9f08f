"""Select rows for publication on the domain portal sitemap."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from reviewdesk.domain.model import ResourceType, Row


@dataclass(frozen=True, slots=True, kw_only=True)
class PortalResource:
    domain: str
    resource_id: str
    name: str
    description: str | None
    resource_type: ResourceType
    resource_url: str | None
    sitemap_group1: str
    sitemap_group2: str
    solution: str | None


def portal_resources(
    rows: Iterable[Row],
    *,
    domain: str,
    resource_type: ResourceType,
) -> list[PortalResource]:
    """Rows flagged for the sitemap that name at least a first sitemap group."""

    resources: list[PortalResource] = []
    for row in rows:
        if not row.include_sitemap or not row.sitemap_group1:
            continue
        resource_id = row.folder_name if resource_type.is_artifact else row.name
        resources.append(
            PortalResource(
                domain=domain,
                resource_id=resource_id,
                name=row.label,
                description=row.summary_short,
                resource_type=resource_type,
                resource_url=row.resource_url,
                sitemap_group1=row.sitemap_group1,
                sitemap_group2=row.sitemap_group2 or row.sitemap_group1,
                solution=row.solution,
            )
        )
    return resources
