"""Engagement analytics value objects attached to dashboard rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from .enums import HealthStatus


@dataclass(frozen=True, slots=True, kw_only=True)
class AnalyticsWindow:
    """View aggregates for one dashboard over trailing 7/30/90-day windows."""

    views_7d: int = 0
    views_30d: int = 0
    views_90d: int = 0
    users_30d: int | None = None
    last_viewed: date | None = None


@dataclass(frozen=True, slots=True)
class HealthScore:
    score: int
    status: HealthStatus

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"Health score out of range: {self.score}")


@dataclass(frozen=True, slots=True)
class DashboardAnalytics:
    window: AnalyticsWindow
    health: HealthScore
