"""Review-mode predicate over merged rows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from reviewdesk.domain.model import ReviewMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reviewdesk.domain.model import Row

    from .overlay import EditOverlay

NEEDS_REVIEW_ACTION: Final[str] = "To Review"


def matches_review_mode(row: Row, mode: ReviewMode, overlay: EditOverlay) -> bool:
    match mode:
        case ReviewMode.ALL:
            return True
        case ReviewMode.NEEDS_REVIEW:
            return row.action == NEEDS_REVIEW_ACTION
        case ReviewMode.MODIFIED:
            return row.key in overlay
        case ReviewMode.DELETED:
            return row.is_stale


class ReviewFilter:
    """Cached review-mode filter.

    The cached result is reused until the mode, the overlay version, or the
    caller-supplied ``revision`` of the row sequence changes. Free-text and
    column filters belong to the presentation layer and are ANDed with this
    predicate there.
    """

    def __init__(self, mode: ReviewMode = ReviewMode.ALL) -> None:
        self._mode = mode
        self._cache_token: tuple[int, int] | None = None
        self._cached: list[Row] = []

    @property
    def mode(self) -> ReviewMode:
        return self._mode

    def set_mode(self, value: ReviewMode | str) -> bool:
        """Switch the active mode; return whether it changed."""

        mode = ReviewMode(value)
        if mode is self._mode:
            return False
        self._mode = mode
        self.invalidate()
        return True

    def invalidate(self) -> None:
        self._cache_token = None

    def apply(
        self, rows: Sequence[Row], overlay: EditOverlay, *, revision: int | None = None
    ) -> list[Row]:
        if revision is None:
            return [row for row in rows if matches_review_mode(row, self._mode, overlay)]
        token = (revision, overlay.version)
        if self._cache_token == token:
            return list(self._cached)
        self._cached = [row for row in rows if matches_review_mode(row, self._mode, overlay)]
        self._cache_token = token
        return list(self._cached)
