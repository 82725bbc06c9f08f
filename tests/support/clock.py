from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reviewdesk.domain.time_windows import Clock

NOW = datetime(2025, 6, 15, 12, tzinfo=UTC)


def fixed_clock(reference: datetime = NOW) -> Clock:
    def _clock() -> datetime:
        return reference

    return _clock
