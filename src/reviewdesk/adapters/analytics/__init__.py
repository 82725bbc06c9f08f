"""Public interface for the page-view analytics adapter."""

from __future__ import annotations

from .client import AnalyticsFeedClient, AnalyticsFeedError
from .schema import PageViewPayload
from .translator import extract_dashboard_id, parse_page_view

__all__ = [
    "AnalyticsFeedClient",
    "AnalyticsFeedError",
    "PageViewPayload",
    "extract_dashboard_id",
    "parse_page_view",
]
