"""SQLite database connection and schema management.

Provides connection management and schema initialization for the training
tracker. Every caller opens its own short-lived connection through get_db(),
so request handlers running on different threads never share a connection.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import structlog

from sartrack.errors import StorageError

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("data/sartrack.db")

# Seconds a connection waits on a locked database before failing
DEFAULT_BUSY_TIMEOUT = 10.0

# Set once at startup by init_db()
_db_path: Path | None = None
_busy_timeout: float = DEFAULT_BUSY_TIMEOUT


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string (second precision)."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def init_db(db_path: Path | None = None, busy_timeout: float | None = None) -> None:
    """Initialize database with schema.

    Creates the database file and all required tables if they don't exist.

    Args:
        db_path: Path to database file. Defaults to data/sartrack.db
        busy_timeout: Seconds to wait for a write lock. Defaults to 10.
    """
    global _db_path, _busy_timeout
    _db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
    if busy_timeout is not None:
        _busy_timeout = busy_timeout

    _db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db() as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(_db_path))


def get_db_path() -> Path:
    """Path of the configured database file."""
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db(immediate: bool = False) -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Commits on clean exit and rolls back on error. Integrity errors are
    re-raised unchanged so services can translate them; any other sqlite
    failure is raised as StorageError.

    Args:
        immediate: Open the transaction with BEGIN IMMEDIATE, taking the
            write lock up front. Required when a statement reads and writes
            data that concurrent writers also touch.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM dogs").fetchall()
    """
    db_path = get_db_path()

    try:
        conn = sqlite3.connect(db_path, timeout=_busy_timeout, isolation_level=None)
    except sqlite3.Error as exc:
        logger.error("database.connect_failed", path=str(db_path), error=str(exc))
        raise StorageError("database unavailable") from exc

    conn.row_factory = sqlite3.Row

    try:
        conn.execute("PRAGMA foreign_keys = ON")
        conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        yield conn
        conn.execute("COMMIT")
    except sqlite3.IntegrityError:
        _rollback(conn)
        raise
    except sqlite3.Error as exc:
        _rollback(conn)
        logger.error("database.error", path=str(db_path), error=str(exc))
        raise StorageError(str(exc)) from exc
    except Exception:
        _rollback(conn)
        raise
    finally:
        conn.close()


def _rollback(conn: sqlite3.Connection) -> None:
    if conn.in_transaction:
        conn.execute("ROLLBACK")


def ping_db() -> bool:
    """Check that the database file exists and answers a query.

    Unlike get_db(), never creates the file.
    """
    uri = f"{get_db_path().resolve().as_uri()}?mode=rw"
    try:
        conn = sqlite3.connect(uri, uri=True, timeout=1.0)
        try:
            conn.execute("SELECT 1").fetchone()
        finally:
            conn.close()
    except sqlite3.Error as exc:
        logger.warning("database.ping_failed", error=str(exc))
        return False
    return True


def is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    """True for UNIQUE / PRIMARY KEY constraint failures."""
    message = str(exc).upper()
    return "UNIQUE" in message or "PRIMARY KEY" in message


def is_foreign_key_violation(exc: sqlite3.IntegrityError) -> bool:
    """True for FOREIGN KEY constraint failures."""
    return "FOREIGN KEY" in str(exc).upper()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency.
    """
    statements = [
        """
        CREATE TABLE IF NOT EXISTS skills (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            description TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS behaviors (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            skill_id INTEGER NOT NULL REFERENCES skills(id) ON DELETE RESTRICT,
            name TEXT NOT NULL,
            description TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            UNIQUE (skill_id, name)
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS exercises (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            description TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS behavior_exercises (
            behavior_id INTEGER NOT NULL REFERENCES behaviors(id) ON DELETE CASCADE,
            exercise_id INTEGER NOT NULL REFERENCES exercises(id) ON DELETE CASCADE,
            strength INTEGER NOT NULL CHECK (strength BETWEEN 1 AND 5),
            PRIMARY KEY (behavior_id, exercise_id)
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS dogs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            callname TEXT,
            birthdate TEXT,
            notes TEXT
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            started_at TEXT NOT NULL,
            ended_at TEXT,
            location TEXT,
            notes TEXT
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS session_dogs (
            session_id INTEGER NOT NULL REFERENCES sessions(id) ON DELETE CASCADE,
            dog_id INTEGER NOT NULL REFERENCES dogs(id) ON DELETE CASCADE,
            PRIMARY KEY (session_id, dog_id)
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS rounds (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            session_id INTEGER NOT NULL REFERENCES sessions(id) ON DELETE CASCADE,
            dog_id INTEGER NOT NULL REFERENCES dogs(id) ON DELETE RESTRICT,
            round_number INTEGER NOT NULL,
            exercise_id INTEGER NOT NULL REFERENCES exercises(id) ON DELETE RESTRICT,
            planned_behavior_id INTEGER NOT NULL REFERENCES behaviors(id) ON DELETE RESTRICT,
            exhibited_behavior_id INTEGER REFERENCES behaviors(id) ON DELETE RESTRICT,
            exhibited_free_text TEXT,
            outcome TEXT NOT NULL CHECK (outcome IN ('success', 'partial', 'fail')),
            score INTEGER,
            notes TEXT,
            started_at TEXT,
            ended_at TEXT,
            UNIQUE (session_id, dog_id, round_number)
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS dog_behavior_proficiency (
            dog_id INTEGER NOT NULL REFERENCES dogs(id) ON DELETE CASCADE,
            behavior_id INTEGER NOT NULL REFERENCES behaviors(id) ON DELETE CASCADE,
            level INTEGER NOT NULL,
            last_round_id INTEGER REFERENCES rounds(id) ON DELETE SET NULL,
            updated_at TEXT NOT NULL,
            PRIMARY KEY (dog_id, behavior_id)
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            is_admin INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_behaviors_skill ON behaviors(skill_id)",
        "CREATE INDEX IF NOT EXISTS idx_rounds_session ON rounds(session_id)",
        "CREATE INDEX IF NOT EXISTS idx_rounds_dog ON rounds(dog_id)",
        "CREATE INDEX IF NOT EXISTS idx_rounds_planned ON rounds(planned_behavior_id)",
        "CREATE INDEX IF NOT EXISTS idx_behavior_exercises_ex ON behavior_exercises(exercise_id)",
    ]
    # executescript() would COMMIT the surrounding transaction
    for statement in statements:
        conn.execute(statement)
