from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.support.clock import fixed_clock
from tests.support.metadata_store import FakeMetadataStore

if TYPE_CHECKING:
    from reviewdesk.domain.time_windows import Clock


@pytest.fixture
def store() -> FakeMetadataStore:
    return FakeMetadataStore()


@pytest.fixture
def clock() -> Clock:
    return fixed_clock()


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> None:
    for name in (
        "ANALYTICS_FEED_URL",
        "ANALYTICS_FEED_KEY",
        "ANALYTICS_FEED_TABLE",
        "ANALYTICS_FEED_PAGE_SIZE",
        "ANALYTICS_FEED_CACHE_TTL",
        "REVIEWDESK_PORTAL_HOST",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("REVIEWDESK_DATA_DIR", str(tmp_path_factory.mktemp("reviewdesk-data")))
