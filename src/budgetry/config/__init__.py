"""Application configuration helpers."""

from __future__ import annotations

from .env import read_env_bool, read_env_int, read_env_list
from .errors import ConfigurationError
from .imports import ImportConfig, get_import_config
from .locales import LocaleConfig, StaticLocaleRegistry, get_locale_config, get_locale_registry
from .logging import configure_logging, resolve_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "ImportConfig",
    "LocaleConfig",
    "StaticLocaleRegistry",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_import_config",
    "get_locale_config",
    "get_locale_registry",
    "get_storage_config",
    "read_env_bool",
    "read_env_int",
    "read_env_list",
    "resolve_log_level",
]
