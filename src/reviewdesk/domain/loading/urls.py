"""Derive portal URLs and domain slugs from storage paths.

Entities live under ``.../domains/<environment>/<domain>/...``; the domain
segment names the portal host and the directory suffix of an artifact
(``dashboard_123``) carries its numeric identifier.
"""

from __future__ import annotations

import re
from typing import Final

from reviewdesk.domain.model import ResourceType

DEFAULT_PORTAL_HOST: Final[str] = "thinkval.io"

_DOMAIN_PATTERN: Final[re.Pattern[str]] = re.compile(r"/domains/[^/]+/([^/]+)")

_ARTIFACT_ROUTES: Final[dict[ResourceType, str]] = {
    ResourceType.DASHBOARD: "/dashboard/private/{id}",
    ResourceType.QUERY: "/admin/querybuilder/{id}",
    ResourceType.WORKFLOW: "/workflow/detail/{id}",
}


def extract_domain(path: str) -> str | None:
    """Return the domain segment following ``/domains/<environment>/``."""

    match = _DOMAIN_PATTERN.search(path)
    return match.group(1) if match else None


def extract_artifact_id(folder_name: str, resource_type: ResourceType) -> str | None:
    match = re.search(rf"{re.escape(resource_type.folder_prefix)}(\d+)", folder_name)
    return match.group(1) if match else None


def build_resource_url(
    folder_path: str,
    resource_type: ResourceType,
    *,
    portal_host: str = DEFAULT_PORTAL_HOST,
) -> str | None:
    domain = extract_domain(folder_path)
    if domain is None:
        return None
    base_url = f"https://{domain}.{portal_host}"

    route = _ARTIFACT_ROUTES.get(resource_type)
    if route is None:
        # tables need space/zone metadata for a deep link
        return base_url
    folder_name = folder_path.rstrip("/").rsplit("/", 1)[-1]
    artifact_id = extract_artifact_id(folder_name, resource_type)
    if artifact_id is None:
        return base_url
    return base_url + route.format(id=artifact_id)
