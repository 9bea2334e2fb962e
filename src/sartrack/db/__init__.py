"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization
- Repository functions per table (skills, behaviors, exercises and links,
  dogs, sessions, rounds, proficiency, users)
"""

from sartrack.db.database import get_db, init_db, ping_db

__all__ = ["get_db", "init_db", "ping_db"]
