"""Translate page-view feed rows into domain events."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from reviewdesk.domain.ports.analytics import PageViewEvent

from .schema import PageViewPayload

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

_DASHBOARD_PATH: Final[re.Pattern[str]] = re.compile(r"/dashboard/(?:private|public)/([^/?#]+)")


def extract_dashboard_id(page_path: str) -> str | None:
    """Return the id in ``/dashboard/<private|public>/<id>``, ignoring any suffix."""

    match = _DASHBOARD_PATH.search(page_path)
    return match.group(1) if match else None


def parse_page_view(payload: PageViewPayload | Mapping[str, object]) -> PageViewEvent | None:
    """Build an event from one feed row; rows that name no dashboard yield ``None``."""

    if not isinstance(payload, PageViewPayload):
        try:
            payload = PageViewPayload.model_validate(payload)
        except ValidationError as exc:
            log.warning(f"Skipping malformed page-view row: {exc.error_count()} error(s)")
            return None

    dashboard_id = extract_dashboard_id(payload.page_path)
    if dashboard_id is None:
        log.debug(f"No dashboard id in page path {payload.page_path!r}")
        return None

    return PageViewEvent(
        entity_ref=dashboard_id,
        view_date=payload.view_date,
        views=payload.views,
        user_id=payload.user_id,
        is_internal=payload.is_internal,
    )
