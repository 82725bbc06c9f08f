"""Translate overlay entries back into analysis documents."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

# overlay field -> path inside definition_analysis.json
_DOCUMENT_PATHS: Final[dict[str, tuple[str, ...]]] = {
    "data_type": ("classification", "dataType"),
    "summary_short": ("summary", "short"),
    "summary_full": ("summary", "full"),
    "data_category": ("dataCategory",),
    "data_sub_category": ("dataSubCategory",),
    "usage_status": ("usageStatus",),
    "action": ("action",),
    "data_source": ("dataSource",),
    "source_system": ("sourceSystem",),
    "tags": ("tags",),
    "suggested_name": ("suggestedName",),
    "include_sitemap": ("includeSitemap",),
    "sitemap_group1": ("sitemapGroup1",),
    "sitemap_group2": ("sitemapGroup2",),
    "solution": ("solution",),
    "resource_url": ("resourceUrl",),
}


@dataclass(frozen=True, slots=True)
class AnalysisDocumentUpdate:
    key: str
    path: str
    document: dict[str, Any]

    def render(self) -> str:
        return json.dumps(self.document, indent=2)


def build_analysis_document(
    existing: Mapping[str, Any] | None,
    changes: Mapping[str, object],
) -> dict[str, Any]:
    """Merge overlay ``changes`` into a copy of an analysis document."""

    document: dict[str, Any] = json.loads(json.dumps(existing)) if existing else {}
    for field, value in changes.items():
        path = _DOCUMENT_PATHS.get(field)
        if path is None:
            continue
        target = document
        for part in path[:-1]:
            nested = target.get(part)
            if not isinstance(nested, dict):
                nested = {}
                target[part] = nested
            target = nested
        target[path[-1]] = value
    if "data_type" in changes and "dataType" in document:
        document["dataType"] = changes["data_type"]
    return document
