"""HTTP client for the PostgREST page-view feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx

from reviewdesk.adapters.http_resilience import ResilientClient
from reviewdesk.config.analytics import AnalyticsConfig, get_analytics_config

from .translator import parse_page_view

if TYPE_CHECKING:
    from collections.abc import Callable

    from reviewdesk.config.http_resilience import ResilienceConfig
    from reviewdesk.domain.ports.analytics import AnalyticsFeed, PageViewEvent

log = getLogger(__name__)

SELECTED_COLUMNS: Final[str] = "page_path,view_date,views,user_id,is_internal"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class AnalyticsFeedError(RuntimeError):
    """Raised when the page-view feed answers with an error or an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class AnalyticsFeedClient:
    config: AnalyticsConfig = field(default_factory=get_analytics_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url}/rest/v1/{self.config.table}"

    async def query(self, domain: str, path_prefix: str) -> list[PageViewEvent]:
        """Return external page views of ``domain`` whose path starts with ``path_prefix``."""

        events: list[PageViewEvent] = []
        page_size = self.config.page_size
        offset = 0

        async with self.client_factory(self.config.resilience) as client:
            while True:
                rows = await self._request_page(
                    client, domain=domain, path_prefix=path_prefix, offset=offset
                )
                for row in rows:
                    event = parse_page_view(row)
                    if event is not None:
                        events.append(event)
                if len(rows) < page_size:
                    break
                offset += page_size

        log.debug(f"Fetched {len(events)} page-view events for {domain} under {path_prefix}")
        return events

    async def _request_page(
        self,
        client: ResilientClient,
        *,
        domain: str,
        path_prefix: str,
        offset: int,
    ) -> list[dict[str, object]]:
        params = httpx.QueryParams(
            {
                "select": SELECTED_COLUMNS,
                "domain": f"eq.{domain}",
                "page_path": f"like.{path_prefix}*",
                "is_internal": "eq.false",
                "order": "view_date.desc",
                "limit": self.config.page_size,
                "offset": offset,
            }
        )
        headers = {
            "apikey": self.config.api_key,
            "Authorization": f"Bearer {self.config.api_key}",
            "Accept": "application/json",
        }
        try:
            response = await client.get(self.endpoint, params=params, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            log.error(f"Page-view feed answered {status} for {domain}")
            raise AnalyticsFeedError(f"Page-view feed returned {status}", status_code=status) from exc
        except httpx.HTTPError as exc:
            raise AnalyticsFeedError(f"Page-view feed request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise AnalyticsFeedError("Page-view feed answered with invalid JSON") from exc
        if not isinstance(payload, list):
            raise AnalyticsFeedError("Unexpected page-view feed payload")
        return [row for row in payload if isinstance(row, dict)]


if TYPE_CHECKING:
    _feed_check: AnalyticsFeed = AnalyticsFeedClient()
