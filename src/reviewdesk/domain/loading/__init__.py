"""Row loading from the hierarchical metadata store."""

from __future__ import annotations

from .artifacts import artifact_key
from .loader import load_rows
from .urls import DEFAULT_PORTAL_HOST, build_resource_url, extract_domain

__all__ = [
    "DEFAULT_PORTAL_HOST",
    "artifact_key",
    "build_resource_url",
    "extract_domain",
    "load_rows",
]
