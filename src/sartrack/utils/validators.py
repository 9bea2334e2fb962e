"""Input validation helpers shared by the service layer.

Conventions:
- Entity ids are positive integers; bool is rejected even though it is an int.
- Names are stripped and must be non-blank; optional text collapses to None.
- Timestamps are ISO-8601, stored normalized to UTC. Naive values are UTC.
- Dates (dog birthdate) are stored as YYYY-MM-DD.

Functions:
- require_positive_id(value, field) -> int
- require_text(value, field) -> str
- optional_text(value) -> str | None
- parse_timestamp(value, field) -> str | None
- parse_date(value, field) -> str | None
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sartrack.errors import ValidationError


def require_positive_id(value: object, field: str) -> int:
    """Return value as id, or raise ValidationError if not a positive int."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field} must be a positive integer")
    return value


def optional_positive_id(value: object, field: str) -> int | None:
    """Like require_positive_id, but None passes through."""
    if value is None:
        return None
    return require_positive_id(value, field)


def require_text(value: str | None, field: str) -> str:
    """Return stripped text, or raise ValidationError if blank."""
    if value is None:
        raise ValidationError(f"{field} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    if not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def optional_text(value: str | None) -> str | None:
    """Strip text; blank becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("text fields must be strings")
    value = value.strip()
    return value or None


def parse_timestamp(value: str | datetime | None, field: str) -> str | None:
    """Parse an ISO-8601 timestamp and return it as a UTC ISO string.

    Args:
        value: ISO string, datetime, or None
        field: Field name used in the error message

    Returns:
        Normalized timestamp, or None when value is None

    Raises:
        ValidationError: If value is not a valid ISO-8601 timestamp
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO-8601 timestamp")
    else:
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be an ISO-8601 timestamp")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc).isoformat()


def parse_date(value: str | date | None, field: str) -> str | None:
    """Parse a calendar date and return it as YYYY-MM-DD.

    A full timestamp is accepted; only its date part is kept.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")
