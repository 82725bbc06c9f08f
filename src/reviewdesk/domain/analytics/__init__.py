"""Dashboard engagement analytics."""

from __future__ import annotations

from .aggregate import aggregate_page_views
from .enrich import apply_dashboard_windows, enrich_dashboards, fetch_dashboard_windows
from .health import compute_health

__all__ = [
    "aggregate_page_views",
    "apply_dashboard_windows",
    "compute_health",
    "enrich_dashboards",
    "fetch_dashboard_windows",
]
