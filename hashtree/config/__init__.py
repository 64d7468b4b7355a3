"""
Runtime Configuration Module

Provides configuration loading and management for hashtree.
"""

from .runtime import (
    DEFAULT_HASH_ALGORITHM,
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    configure_logging,
    get_default_config,
    set_default_config,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "HashingConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "configure_logging",
    "get_default_config",
    "set_default_config",
]
