"""Pydantic models describing rows of the page-view feed."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class AnalyticsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PageViewPayload(AnalyticsBaseModel):
    page_path: str
    view_date: date
    views: int = 0
    user_id: str | None = None
    is_internal: bool = False
    domain: str | None = None

    @field_validator("view_date", mode="before")
    @classmethod
    def _strip_time(cls, value: object) -> object:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @field_validator("views", mode="before")
    @classmethod
    def _null_views(cls, value: object) -> object:
        return 0 if value is None else value

    @field_validator("is_internal", mode="before")
    @classmethod
    def _null_internal(cls, value: object) -> object:
        return False if value is None else value

    _normalize_user_id = field_validator("user_id", mode="before")(_blank_to_none)
