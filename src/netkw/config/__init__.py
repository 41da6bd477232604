"""
Configuration module for netkw.
Provides hierarchical configuration with validation and defaults.
"""

from .base import (
    BaseConfig,
    ArrayConfig,
    LoggingConfig,
    NetKWConfig,
    DTypeName,
    LogLevel,
    get_config,
    set_config,
    load_config,
    configure_logging
)

__all__ = [
    "BaseConfig",
    "ArrayConfig",
    "LoggingConfig",
    "NetKWConfig",
    "DTypeName",
    "LogLevel",
    "get_config",
    "set_config",
    "load_config",
    "configure_logging"
]
