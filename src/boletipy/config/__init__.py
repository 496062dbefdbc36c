"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError, InvalidConfigurationValueError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .loterias import GAME_ENDPOINTS, GameEndpoint, LoteriasConfig, get_loterias_config
from .reconciliation import ReconciliationConfig, get_reconciliation_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "GAME_ENDPOINTS",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "GameEndpoint",
    "InvalidConfigurationValueError",
    "LoteriasConfig",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_loterias_config",
    "get_reconciliation_config",
    "get_storage_config",
    "optional_env_var",
]
