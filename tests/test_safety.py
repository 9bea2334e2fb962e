"""Safety tests to ensure the test suite doesn't touch the default database.

Tests must always point the database at a temporary directory. These checks
fail if the app or CLI fall back to ./data/sartrack.db while a path is
configured.
"""

from pathlib import Path

from fastapi.testclient import TestClient
from typer.testing import CliRunner

from sartrack.cli.commands import app
from sartrack.db.database import DEFAULT_DB_PATH, get_db_path
from sartrack.web.api import create_app


class TestDefaultDatabaseUntouched:
    """Configured paths are always honored."""

    def test_app_uses_configured_path(self, app_config):
        client = TestClient(create_app(app_config))
        client.post("/skills", json={"name": "Trailing"})

        assert get_db_path() == Path(app_config.database.path)
        assert Path(app_config.database.path).exists()
        assert not DEFAULT_DB_PATH.exists()

    def test_cli_uses_db_option(self, tmp_path):
        result = CliRunner().invoke(app, ["init-db", "--db", str(tmp_path / "x.db")])

        assert result.exit_code == 0
        assert not DEFAULT_DB_PATH.exists()
