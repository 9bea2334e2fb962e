"""Configuration package for sartrack."""

from sartrack.config.app_config import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    ServerConfig,
    clear_config_cache,
    load_app_config,
)
from sartrack.config.logging import configure_logging

__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "ServerConfig",
    "clear_config_cache",
    "configure_logging",
    "load_app_config",
]
