"""Application configuration loader.

Loads configuration from config/sartrack.yaml (or the file named by
SARTRACK_CONFIG), falls back to built-in defaults, then applies environment
variable overrides.

Usage:
    from sartrack.config.app_config import load_app_config

    config = load_app_config()
    print(config.server.port)

Environment overrides:
    SARTRACK_DB_PATH, SARTRACK_HOST, SARTRACK_PORT, SARTRACK_LOG_LEVEL,
    SARTRACK_AUTH_SECRET, SARTRACK_AUTH_REQUIRED
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to working directory)
CONFIG_FILE = Path("config/sartrack.yaml")
CONFIG_ENV_VAR = "SARTRACK_CONFIG"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class DatabaseConfig:
    """SQLite settings."""

    path: str = "data/sartrack.db"
    busy_timeout: float = 10.0


@dataclass
class AuthConfig:
    """Authentication settings.

    secret is None unless configured; the app then generates a per-process
    secret, so tokens do not survive a restart.
    """

    required: bool = False
    secret: str | None = None
    token_ttl_hours: int = 24 * 7
    cookie_name: str = "auth"
    cookie_secure: bool = False


@dataclass
class AppConfig:
    """Application-wide configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "server": {
            "host": "127.0.0.1",
            "port": 8080,
            "log_level": "info",
            "cors_origins": ["*"],
        },
        "database": {
            "path": "data/sartrack.db",
            "busy_timeout": 10.0,
        },
        "auth": {
            "required": False,
            "secret": None,
            "token_ttl_hours": 24 * 7,
            "cookie_name": "auth",
            "cookie_secure": False,
        },
    }


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge file values section by section over the defaults."""
    result = copy.deepcopy(base)
    for section, values in (override or {}).items():
        if isinstance(values, dict) and isinstance(result.get(section), dict):
            result[section].update(values)
        else:
            result[section] = values
    return result


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply SARTRACK_* environment variables."""
    env = os.environ

    if db_path := env.get("SARTRACK_DB_PATH"):
        data["database"]["path"] = db_path
    if host := env.get("SARTRACK_HOST"):
        data["server"]["host"] = host
    if port := env.get("SARTRACK_PORT"):
        try:
            data["server"]["port"] = int(port)
        except ValueError:
            logger.warning("config.invalid_port", value=port)
    if log_level := env.get("SARTRACK_LOG_LEVEL"):
        data["server"]["log_level"] = log_level.lower()
    if secret := env.get("SARTRACK_AUTH_SECRET"):
        data["auth"]["secret"] = secret
    if required := env.get("SARTRACK_AUTH_REQUIRED"):
        data["auth"]["required"] = required.strip().lower() in _TRUE_VALUES

    return data


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    server_data = data.get("server") or {}
    server = ServerConfig(
        host=server_data.get("host", "127.0.0.1"),
        port=int(server_data.get("port", 8080)),
        log_level=str(server_data.get("log_level", "info")).lower(),
        cors_origins=list(server_data.get("cors_origins") or ["*"]),
    )

    db_data = data.get("database") or {}
    database = DatabaseConfig(
        path=str(db_data.get("path", "data/sartrack.db")),
        busy_timeout=float(db_data.get("busy_timeout", 10.0)),
    )

    auth_data = data.get("auth") or {}
    auth = AuthConfig(
        required=bool(auth_data.get("required", False)),
        secret=auth_data.get("secret") or None,
        token_ttl_hours=int(auth_data.get("token_ttl_hours", 24 * 7)),
        cookie_name=auth_data.get("cookie_name", "auth"),
        cookie_secure=bool(auth_data.get("cookie_secure", False)),
    )

    return AppConfig(server=server, database=database, auth=auth)


def get_config_path() -> Path:
    """Config file in use: SARTRACK_CONFIG if set, else config/sartrack.yaml."""
    return Path(os.environ.get(CONFIG_ENV_VAR) or CONFIG_FILE)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    config_path = get_config_path()
    data = _get_defaults()

    if config_path.exists():
        logger.debug("loading_app_config", source=str(config_path))
        file_data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        data = _merge(data, file_data)
    else:
        logger.info("using_default_config")

    _cached_config = _parse_config(_apply_env_overrides(data))
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
