"""Application configuration helpers."""

from __future__ import annotations

from .cluster import ClusterConfig, get_cluster_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .prune import PruneConfig, get_prune_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ClusterConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "PruneConfig",
    "StorageConfig",
    "configure_logging",
    "get_cluster_config",
    "get_database_config",
    "get_prune_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
