"""Tests for app configuration.

Tests the YAML loading, defaults and environment overrides.
"""

from pathlib import Path

from sartrack.config.app_config import (
    AppConfig,
    AuthConfig,
    clear_config_cache,
    load_app_config,
)


def _write_config(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_defaults_without_file(self):
        """No config file yields built-in defaults."""
        config = load_app_config()
        assert isinstance(config, AppConfig)
        assert config.server.port == 8080
        assert config.database.path == "data/sartrack.db"
        assert isinstance(config.auth, AuthConfig)
        assert config.auth.required is False
        assert config.auth.secret is None

    def test_loads_yaml_file(self, tmp_path):
        _write_config(
            tmp_path / "config" / "sartrack.yaml",
            "server:\n  port: 9000\ndatabase:\n  path: other.db\n",
        )
        config = load_app_config()
        assert config.server.port == 9000
        assert config.database.path == "other.db"
        # Sections not in the file keep defaults
        assert config.server.host == "127.0.0.1"
        assert config.auth.cookie_name == "auth"

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        path = _write_config(tmp_path / "elsewhere.yaml", "auth:\n  required: true\n")
        monkeypatch.setenv("SARTRACK_CONFIG", str(path))
        assert load_app_config().auth.required is True

    def test_empty_file_uses_defaults(self, tmp_path):
        _write_config(tmp_path / "config" / "sartrack.yaml", "")
        assert load_app_config().server.port == 8080

    def test_result_is_cached(self):
        first = load_app_config()
        assert load_app_config() is first
        assert load_app_config(force_reload=True) is not first

    def test_clear_cache(self, monkeypatch):
        load_app_config()
        monkeypatch.setenv("SARTRACK_PORT", "7000")
        clear_config_cache()
        assert load_app_config().server.port == 7000


class TestEnvOverrides:
    """Tests for SARTRACK_* overrides."""

    def test_env_beats_file(self, tmp_path, monkeypatch):
        _write_config(tmp_path / "config" / "sartrack.yaml", "database:\n  path: file.db\n")
        monkeypatch.setenv("SARTRACK_DB_PATH", "env.db")
        assert load_app_config().database.path == "env.db"

    def test_all_overrides(self, monkeypatch):
        monkeypatch.setenv("SARTRACK_HOST", "0.0.0.0")
        monkeypatch.setenv("SARTRACK_PORT", "8181")
        monkeypatch.setenv("SARTRACK_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SARTRACK_AUTH_SECRET", "s3cret")
        monkeypatch.setenv("SARTRACK_AUTH_REQUIRED", "yes")

        config = load_app_config()
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8181
        assert config.server.log_level == "debug"
        assert config.auth.secret == "s3cret"
        assert config.auth.required is True

    def test_invalid_port_ignored(self, monkeypatch):
        monkeypatch.setenv("SARTRACK_PORT", "eighty")
        assert load_app_config().server.port == 8080
