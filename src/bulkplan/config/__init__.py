"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_positive_int
from .errors import ConfigurationError
from .importing import DEFAULT_IMPORT_BATCH_SIZE, ImportConfig, get_import_config
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_IMPORT_BATCH_SIZE",
    "ConfigurationError",
    "DatabaseConfig",
    "ImportConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_import_config",
    "get_storage_config",
    "optional_positive_int",
]
