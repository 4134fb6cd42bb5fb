"""Application configuration helpers."""

from __future__ import annotations

from .env import env_path
from .errors import ConfigurationError
from .library import TRASH_DIRECTORY_NAME, LibraryConfig, get_library_config
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "TRASH_DIRECTORY_NAME",
    "ConfigurationError",
    "DatabaseConfig",
    "LibraryConfig",
    "StorageConfig",
    "configure_logging",
    "env_path",
    "get_database_config",
    "get_library_config",
    "get_storage_config",
]
