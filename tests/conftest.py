"""Shared pytest fixtures.

Every test runs in its own temporary working directory with SARTRACK_*
environment variables cleared, so config/sartrack.yaml from the repo and the
developer's environment never leak into tests.
"""

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient

from sartrack.config.app_config import AppConfig, AuthConfig, DatabaseConfig, clear_config_cache
from sartrack.core import catalog, dogs, session_manager
from sartrack.db.database import init_db
from sartrack.web.api import create_app

TEST_SECRET = "test-secret-not-for-production-0123456789"

_ENV_VARS = [
    "SARTRACK_CONFIG",
    "SARTRACK_DB_PATH",
    "SARTRACK_HOST",
    "SARTRACK_PORT",
    "SARTRACK_LOG_LEVEL",
    "SARTRACK_AUTH_SECRET",
    "SARTRACK_AUTH_REQUIRED",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test in tmp_path with a clean config cache."""
    monkeypatch.chdir(tmp_path)
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def db_path(tmp_path):
    """Initialize an empty database in tmp_path."""
    path = tmp_path / "test.db"
    init_db(path)
    return path


@dataclass
class Seed:
    """Ids of a minimal catalog: one skill, two behaviors, one exercise, two dogs, one session."""

    skill_id: int
    behavior_id: int
    other_behavior_id: int
    exercise_id: int
    dog_id: int
    other_dog_id: int
    session_id: int


@pytest.fixture
def seed(db_path) -> Seed:
    """Populate the database with a minimal catalog."""
    skill = catalog.create_skill("Area search", "Find a hidden person in an area")
    behavior = catalog.create_behavior(skill.id, "Bark alert")
    other = catalog.create_behavior(skill.id, "Recall")
    exercise = catalog.create_exercise("Runaway", "Helper runs and hides")
    catalog.link_behavior_exercise(behavior.id, exercise.id, 4)
    rex = dogs.create_dog("Rex", callname="Rexy", birthdate="2020-05-01")
    ada = dogs.create_dog("Ada")
    session = session_manager.create_session(location="Quarry")
    return Seed(
        skill_id=skill.id,
        behavior_id=behavior.id,
        other_behavior_id=other.id,
        exercise_id=exercise.id,
        dog_id=rex.id,
        other_dog_id=ada.id,
        session_id=session.id,
    )


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Config pointing at a database in tmp_path, auth optional."""
    return AppConfig(
        database=DatabaseConfig(path=str(tmp_path / "api.db")),
        auth=AuthConfig(secret=TEST_SECRET),
    )


@pytest.fixture
def client(app_config):
    """Create test client."""
    return TestClient(create_app(app_config))
