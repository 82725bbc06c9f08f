from __future__ import annotations

import os
from pathlib import Path

import pytest

from reviewdesk.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_analytics_config,
    get_review_config,
    get_storage_config,
    is_analytics_configured,
    require_env_vars,
)
from reviewdesk.config.analytics import (
    ANALYTICS_CACHE_TTL_SECONDS,
    DEFAULT_ANALYTICS_PAGE_SIZE,
    DEFAULT_ANALYTICS_TABLE,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_analytics_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYTICS_FEED_URL", "https://feed.example/")
    monkeypatch.setenv("ANALYTICS_FEED_KEY", "secret")

    config = get_analytics_config()

    assert is_analytics_configured() is True
    assert config.base_url == "https://feed.example"
    assert config.api_key == "secret"
    assert config.table == DEFAULT_ANALYTICS_TABLE
    assert config.page_size == DEFAULT_ANALYTICS_PAGE_SIZE
    assert config.resilience.base_url == "https://feed.example"
    cache = config.resilience.cache
    assert cache is not None
    assert cache.enabled is True
    assert cache.backend == "sqlite"
    assert cache.default_ttl_seconds == ANALYTICS_CACHE_TTL_SECONDS
    assert cache.refresh_ttl_on_access is False
    assert cache.should_cache is not None
    assert cache.should_cache([{"page_path": "/dashboard/private/1"}]) is True
    assert cache.should_cache({"message": "JWT expired"}) is False


def test_analytics_cache_ttl_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYTICS_FEED_URL", "https://feed.example")
    monkeypatch.setenv("ANALYTICS_FEED_KEY", "secret")
    monkeypatch.setenv("ANALYTICS_FEED_CACHE_TTL", "60")

    cache = get_analytics_config().resilience.cache

    assert cache is not None
    assert cache.default_ttl_seconds == 60


def test_analytics_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYTICS_FEED_URL", "https://feed.example")
    monkeypatch.setenv("ANALYTICS_FEED_KEY", "secret")
    monkeypatch.setenv("ANALYTICS_FEED_TABLE", "page_views_v2")
    monkeypatch.setenv("ANALYTICS_FEED_PAGE_SIZE", "250")

    config = get_analytics_config()

    assert config.table == "page_views_v2"
    assert config.page_size == 250


@pytest.mark.parametrize("page_size", ["many", "0", "-5"])
def test_invalid_page_size_is_rejected(monkeypatch: pytest.MonkeyPatch, page_size: str) -> None:
    monkeypatch.setenv("ANALYTICS_FEED_URL", "https://feed.example")
    monkeypatch.setenv("ANALYTICS_FEED_KEY", "secret")
    monkeypatch.setenv("ANALYTICS_FEED_PAGE_SIZE", page_size)

    with pytest.raises(ConfigurationError, match="ANALYTICS_FEED_PAGE_SIZE"):
        get_analytics_config()


def test_analytics_requires_credentials() -> None:
    assert is_analytics_configured() is False
    with pytest.raises(MissingConfigurationError, match="ANALYTICS_FEED_KEY, ANALYTICS_FEED_URL"):
        get_analytics_config()


def test_review_config_defaults_and_override(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_review_config().portal_host == "thinkval.io"

    monkeypatch.setenv("REVIEWDESK_PORTAL_HOST", ".portal.example")

    assert get_review_config().portal_host == "portal.example"


def test_storage_config_respects_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("REVIEWDESK_DATA_DIR", str(tmp_path / "nested"))

    config = get_storage_config()

    assert config.http_cache_path() == (tmp_path / "nested" / "http_cache.db").resolve()
    assert (tmp_path / "nested").is_dir()


@pytest.mark.skipif(os.name == "nt", reason="uses XDG_DATA_HOME")
def test_storage_config_defaults_to_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("REVIEWDESK_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    config = get_storage_config()

    assert config.data_dir == (tmp_path / "reviewdesk").resolve()
