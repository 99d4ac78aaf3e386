"""Configuration management for the news cache."""

from .loader import DEFAULT_CONFIG_PATH, Config, load_config, save_config
from .models import (
    ConfigModel,
    FetchDefaults,
    LoggingConfig,
    NetworkConfig,
    NewsAPIConfig,
    PostgresConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "DEFAULT_CONFIG_PATH",
    "FetchDefaults",
    "LoggingConfig",
    "NetworkConfig",
    "NewsAPIConfig",
    "PostgresConfig",
    "load_config",
    "save_config",
]
