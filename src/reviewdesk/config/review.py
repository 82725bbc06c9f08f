"""Review session configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from reviewdesk.domain.loading import DEFAULT_PORTAL_HOST

from .env import optional_env_var


@dataclass(frozen=True, slots=True)
class ReviewConfig:
    portal_host: str = DEFAULT_PORTAL_HOST


def get_review_config() -> ReviewConfig:
    return ReviewConfig(
        portal_host=optional_env_var("REVIEWDESK_PORTAL_HOST", DEFAULT_PORTAL_HOST).strip(".")
    )
