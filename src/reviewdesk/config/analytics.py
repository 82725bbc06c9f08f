"""Analytics feed configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import optional_env_var, positive_int_env_var, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

ANALYTICS_URL_VAR = "ANALYTICS_FEED_URL"
ANALYTICS_KEY_VAR = "ANALYTICS_FEED_KEY"
DEFAULT_ANALYTICS_TABLE = "analytics_page_views"
DEFAULT_ANALYTICS_PAGE_SIZE = 1000
ANALYTICS_TIMEOUT_SECONDS = 15.0
ANALYTICS_CACHE_TTL_SECONDS = 300


@dataclass(frozen=True, slots=True)
class AnalyticsConfig:
    """Holds the page-view feed endpoint and credentials."""

    base_url: str
    api_key: str
    resilience: ResilienceConfig
    table: str = DEFAULT_ANALYTICS_TABLE
    page_size: int = DEFAULT_ANALYTICS_PAGE_SIZE


def _is_page_view_payload(payload: object) -> bool:
    return isinstance(payload, list)


def is_analytics_configured() -> bool:
    return all((os.getenv(name) or "").strip() for name in (ANALYTICS_URL_VAR, ANALYTICS_KEY_VAR))


def get_analytics_config(*, resilience: ResilienceConfig | None = None) -> AnalyticsConfig:
    values = require_env_vars((ANALYTICS_URL_VAR, ANALYTICS_KEY_VAR))
    base_url = values[ANALYTICS_URL_VAR].rstrip("/")
    return AnalyticsConfig(
        base_url=base_url,
        api_key=values[ANALYTICS_KEY_VAR],
        table=optional_env_var("ANALYTICS_FEED_TABLE", DEFAULT_ANALYTICS_TABLE),
        page_size=positive_int_env_var("ANALYTICS_FEED_PAGE_SIZE", DEFAULT_ANALYTICS_PAGE_SIZE),
        resilience=resilience
        or ResilienceConfig(
            name="analytics",
            base_url=base_url,
            timeout_seconds=ANALYTICS_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            cache=CacheConfig(
                backend="sqlite",
                default_ttl_seconds=positive_int_env_var(
                    "ANALYTICS_FEED_CACHE_TTL", ANALYTICS_CACHE_TTL_SECONDS
                ),
                refresh_ttl_on_access=False,
                should_cache=_is_page_view_payload,
            ),
        ),
    )
