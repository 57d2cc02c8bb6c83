"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging, resolve_log_level
from .membership import DEFAULT_MAX_DAYS_SINCE_LOGIN, MembershipConfig, get_membership_config
from .storage import DatabaseConfig, default_data_dir, get_database_config

__all__ = [
    "DEFAULT_MAX_DAYS_SINCE_LOGIN",
    "ConfigurationError",
    "DatabaseConfig",
    "MembershipConfig",
    "MissingConfigurationError",
    "configure_logging",
    "default_data_dir",
    "get_database_config",
    "get_membership_config",
    "require_env_var",
    "require_env_vars",
    "resolve_log_level",
]
