"""User accounts and bearer tokens.

Provides:
- Password hashing (bcrypt)
- HS256 JWT issue/verify through TokenService
- User registration and login

The signing secret is handed to TokenService by the application factory;
nothing here reads it from module state.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timedelta, timezone

import bcrypt
import structlog
from jose import JWTError, jwt

from sartrack.db import users_repository
from sartrack.db.users_repository import UserRecord
from sartrack.errors import AuthenticationError, ConflictError, ValidationError

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(days=7)
MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a hash."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


class TokenService:
    """Issues and verifies signed access tokens."""

    def __init__(self, secret: str, ttl: timedelta = DEFAULT_TOKEN_TTL) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self.ttl = ttl

    def issue(self, user_id: int) -> str:
        """Create a token whose subject is the user id."""
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> int:
        """Return the user id carried by a valid token.

        Raises:
            AuthenticationError: Bad signature, expired or malformed token
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            raise AuthenticationError("invalid or expired token") from exc

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise AuthenticationError("invalid token payload") from exc


def _normalize_email(email: str | None) -> str:
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise ValidationError("a valid email is required")
    return email


def register_user(email: str, password: str, is_admin: bool = False) -> UserRecord:
    """Create a user account.

    Raises:
        ValidationError: Missing email or password shorter than 8 characters
        ConflictError: Email already registered
    """
    email = _normalize_email(email)
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

    if users_repository.get_user_by_email(email) is not None:
        raise ConflictError("email already registered")

    try:
        user = users_repository.insert_user(email, hash_password(password), is_admin=is_admin)
    except sqlite3.IntegrityError as exc:
        raise ConflictError("email already registered") from exc

    logger.info("users.registered", user_id=user.id, is_admin=is_admin)
    return user


def authenticate(email: str, password: str) -> UserRecord:
    """Check credentials and return the user.

    Raises:
        AuthenticationError: Unknown email or wrong password
    """
    user = users_repository.get_user_by_email((email or "").strip().lower())
    if user is None or not verify_password(password or "", user.password_hash):
        logger.info("users.login_failed")
        raise AuthenticationError("invalid email or password")
    return user


def get_user(user_id: int) -> UserRecord:
    """Get the user behind a verified token.

    Raises:
        AuthenticationError: The account no longer exists
    """
    user = users_repository.get_user_by_id(user_id)
    if user is None:
        raise AuthenticationError("user no longer exists")
    return user
