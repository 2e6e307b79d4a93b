"""Environment-driven settings for reaching the cluster."""

from __future__ import annotations

from .cluster import SERVICE_ACCOUNT_DIR, ClusterConfig, get_cluster_config
from .env import env_flag, env_float, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "SERVICE_ACCOUNT_DIR",
    "ClusterConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "env_float",
    "get_cluster_config",
    "optional_env_var",
    "require_env_vars",
]
