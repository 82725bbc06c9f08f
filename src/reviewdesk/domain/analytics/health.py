"""Engagement health score for dashboards.

The score is the sum of three capped components computed from an
``AnalyticsWindow``:

* recency (0-40) from the days since the last non-zero view,
* frequency (0-30) from the first view-count threshold reached,
* trend (0-30) comparing the last week against a pro-rated share of the
  last 30 days.

A dashboard without any view in 90 days is ``unused`` with score 0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from reviewdesk.domain.model import HealthScore, HealthStatus
from reviewdesk.domain.time_windows import days_since

if TYPE_CHECKING:
    from datetime import datetime

    from reviewdesk.domain.model import AnalyticsWindow

# 30 / 7, kept exactly as the scoring has always used it
WEEKS_PER_MONTH: Final[float] = 4.3
TREND_SHARE: Final[float] = 0.8
NEVER_VIEWED_DAYS: Final[int] = 999

_RECENCY_STEPS: Final[tuple[tuple[int, int], ...]] = ((7, 40), (14, 30), (30, 20), (60, 10))
_STATUS_STEPS: Final[tuple[tuple[int, HealthStatus], ...]] = (
    (80, HealthStatus.ACTIVE),
    (50, HealthStatus.DECLINING),
    (20, HealthStatus.STALE),
    (1, HealthStatus.DEAD),
)

UNUSED: Final[HealthScore] = HealthScore(0, HealthStatus.UNUSED)


def recency_points(days: int) -> int:
    for limit, points in _RECENCY_STEPS:
        if days <= limit:
            return points
    return 0


def frequency_points(window: AnalyticsWindow) -> int:
    if window.views_7d >= 10:
        return 30
    if window.views_30d >= 20:
        return 25
    if window.views_30d >= 5:
        return 15
    if window.views_90d >= 5:
        return 10
    return 5


def trend_points(window: AnalyticsWindow) -> int:
    if window.views_30d > 0 and window.views_7d > 0:
        weekly_share = window.views_30d / WEEKS_PER_MONTH
        return 30 if window.views_7d >= weekly_share * TREND_SHARE else 15
    if window.views_90d > 0 and window.views_30d == 0:
        return 5
    return 10


def status_for(score: int) -> HealthStatus:
    for threshold, status in _STATUS_STEPS:
        if score >= threshold:
            return status
    return HealthStatus.UNUSED


def compute_health(window: AnalyticsWindow, *, now: datetime) -> HealthScore:
    """Score ``window`` as seen at ``now``."""

    if window.views_90d == 0:
        return UNUSED

    days = (
        days_since(window.last_viewed, now=now)
        if window.last_viewed is not None
        else NEVER_VIEWED_DAYS
    )
    total = min(recency_points(days) + frequency_points(window) + trend_points(window), 100)
    return HealthScore(total, status_for(total))
