"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationValueError,
    MissingConfigurationError,
)
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import ReconcileConfig, get_reconcile_config
from .sources import DEFAULT_SOURCE_URLS, SourceConfig, SourceName, get_source_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "DEFAULT_SOURCE_URLS",
    "CacheConfig",
    "ConfigurationError",
    "InvalidConfigurationValueError",
    "MissingConfigurationError",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SourceConfig",
    "SourceName",
    "StorageConfig",
    "configure_logging",
    "get_reconcile_config",
    "get_source_config",
    "get_storage_config",
    "require_env_vars",
]
