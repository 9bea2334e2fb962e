"""Error taxonomy shared by the database, service and web layers.

Each error maps to one HTTP status in the web layer:

- ValidationError -> 400
- AuthenticationError -> 401
- NotFoundError -> 404
- ConflictError -> 409
- StorageError -> 500 (logged, never echoed to the client)
"""

from __future__ import annotations


class SarTrackError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SarTrackError):
    """Malformed or missing input, bad enum value, out-of-range value."""

    status_code = 400


class AuthenticationError(SarTrackError):
    """Missing, expired or invalid credentials."""

    status_code = 401


class NotFoundError(SarTrackError):
    """Referenced entity does not exist."""

    status_code = 404


class ConflictError(SarTrackError):
    """Duplicate unique key, or entity still referenced on delete."""

    status_code = 409


class StorageError(SarTrackError):
    """Lower-layer database failure."""

    status_code = 500
