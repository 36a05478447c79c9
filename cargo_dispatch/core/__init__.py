"""
Core infrastructure for the dispatch dashboard.

This module provides:
- Config: Configuration management
- Logging: structlog setup
- Exceptions: Error hierarchy
"""

from .config import ConfigManager, get_config
from .exceptions import (
    AuthError,
    ConfigurationError,
    DispatchError,
    DocumentNotFoundError,
    DuplicateCargoIdError,
)
from .logging import configure_logging

__all__ = [
    "ConfigManager",
    "get_config",
    "configure_logging",
    "DispatchError",
    "ConfigurationError",
    "DocumentNotFoundError",
    "DuplicateCargoIdError",
    "AuthError",
]
