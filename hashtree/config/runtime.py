"""
Runtime Configuration

Central configuration for hashing and logging.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


DEFAULT_HASH_ALGORITHM = "sha256"


@dataclass
class HashingConfig:
    """Configuration for the content hasher."""
    algorithm: str = DEFAULT_HASH_ALGORITHM

    def __post_init__(self):
        self.algorithm = self.algorithm.strip().lower()


@dataclass
class LoggingConfig:
    """Configuration for package logging."""
    level: str = "WARNING"
    logger_name: str = "hashtree"

    def __post_init__(self):
        self.level = self.level.strip().upper()


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for hashtree.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: hashlib algorithm name (e.g. sha256, md5)
        - HASHTREE_LOG_LEVEL: logging level name
        - HASHTREE_DEBUG: force DEBUG logging (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv("HASHTREE_HASH_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv("HASHTREE_HASH_ALGORITHM")

        if os.getenv("HASHTREE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("HASHTREE_LOG_LEVEL")
        if os.getenv("HASHTREE_DEBUG", "false").lower() == "true":
            overrides.setdefault("logging", {})["level"] = "DEBUG"

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        logging_data = data.get("logging", {})

        hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
        log_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            hashing=hashing,
            logging=log_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        if "hashing" in overrides:
            new_config.hashing = replace(new_config.hashing, **overrides["hashing"])
        if "logging" in overrides:
            new_config.logging = replace(new_config.logging, **overrides["logging"])
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
            },
            "logging": {
                "level": self.logging.level,
                "logger_name": self.logging.logger_name,
            },
            "extra": self.extra,
        }


def configure_logging(config: Optional[RuntimeConfig] = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    config = config or get_default_config()
    logger = logging.getLogger(config.logging.logger_name)
    level = logging.getLevelName(config.logging.level)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.logging.level}")
    logger.setLevel(level)
    return logger


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
