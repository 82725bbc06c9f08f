"""Utilities for trailing time windows anchored at an injectable clock."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def _ensure_aware(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        raise ValueError("Time window values must include timezone information")
    return value.astimezone(UTC)


def start_of_day(value: date) -> datetime:
    """Return UTC midnight of ``value``."""

    return datetime.combine(value, time.min, tzinfo=UTC)


@dataclass(frozen=True)
class TimeWindow:
    """Describe temporal bounds, optionally relative to a lookback duration."""

    start: datetime | None = None
    end: datetime | None = None
    lookback: timedelta | None = None

    @classmethod
    def trailing_days(cls, days: int, *, end: datetime | None = None) -> TimeWindow:
        return cls(end=end, lookback=timedelta(days=days))

    def resolve(self, *, clock: Clock = utcnow) -> tuple[datetime | None, datetime | None]:
        """Resolve the window into concrete UTC timestamps."""

        resolved_end = _ensure_aware(self.end)
        resolved_start = _ensure_aware(self.start)

        if self.lookback is not None:
            if self.lookback < timedelta(0):
                raise ValueError("Lookback duration must be non-negative")
            anchor = resolved_end or clock()
            if anchor.tzinfo is None:
                anchor = anchor.replace(tzinfo=UTC)
            anchor = anchor.astimezone(UTC)
            start_from_lookback = anchor - self.lookback
            if resolved_start is None:
                resolved_start = start_from_lookback
            else:
                resolved_start = max(resolved_start, start_from_lookback)
            if resolved_end is None:
                resolved_end = anchor

        if resolved_start and resolved_end and resolved_start > resolved_end:
            raise ValueError("Time window start must be before end")

        return resolved_start, resolved_end


def days_since(value: date, *, now: datetime) -> int:
    """Whole days elapsed between UTC midnight of ``value`` and ``now``."""

    if now.tzinfo is None:
        raise ValueError("Time window values must include timezone information")
    return (now.astimezone(UTC) - start_of_day(value)) // timedelta(days=1)


__all__ = ["Clock", "TimeWindow", "days_since", "start_of_day", "utcnow"]
