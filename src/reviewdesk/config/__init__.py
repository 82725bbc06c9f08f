"""Application configuration helpers."""

from __future__ import annotations

from .analytics import AnalyticsConfig, get_analytics_config, is_analytics_configured
from .env import optional_env_var, positive_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .review import ReviewConfig, get_review_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "AnalyticsConfig",
    "CacheConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ReviewConfig",
    "StorageConfig",
    "get_analytics_config",
    "get_review_config",
    "get_storage_config",
    "is_analytics_configured",
    "optional_env_var",
    "positive_int_env_var",
    "require_env_vars",
]
