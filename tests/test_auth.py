"""Tests for users, password hashing and tokens."""

from datetime import timedelta

import pytest
from jose import jwt

from sartrack.core import auth
from sartrack.core.auth import TokenService
from sartrack.errors import AuthenticationError, ConflictError, ValidationError

SECRET = "unit-test-secret-0123456789abcdef"


class TestTokenService:
    """Tests for TokenService."""

    def test_issue_and_verify(self):
        tokens = TokenService(SECRET)
        assert tokens.verify(tokens.issue(42)) == 42

    def test_other_secret_rejected(self):
        token = TokenService(SECRET).issue(1)
        with pytest.raises(AuthenticationError):
            TokenService("another-secret-value-0123456789").verify(token)

    def test_expired_token_rejected(self):
        tokens = TokenService(SECRET, ttl=timedelta(seconds=-10))
        with pytest.raises(AuthenticationError):
            tokens.verify(tokens.issue(1))

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError):
            TokenService(SECRET).verify("not.a.token")

    def test_non_numeric_subject_rejected(self):
        token = jwt.encode({"sub": "alice"}, SECRET, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            TokenService(SECRET).verify(token)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestRegisterUser:
    """Tests for register_user."""

    def test_register_hashes_password(self, db_path):
        user = auth.register_user("Handler@Example.com", "correct horse")
        assert user.email == "handler@example.com"
        assert user.password_hash != "correct horse"
        assert auth.verify_password("correct horse", user.password_hash)

    def test_short_password(self, db_path):
        with pytest.raises(ValidationError):
            auth.register_user("a@example.com", "short")

    def test_missing_email(self, db_path):
        with pytest.raises(ValidationError):
            auth.register_user("  ", "long enough")

    def test_duplicate_email(self, db_path):
        auth.register_user("a@example.com", "long enough")
        with pytest.raises(ConflictError):
            auth.register_user("A@example.com", "long enough")


class TestAuthenticate:
    """Tests for authenticate."""

    def test_valid_credentials(self, db_path):
        created = auth.register_user("a@example.com", "long enough")
        assert auth.authenticate("A@Example.com", "long enough").id == created.id

    def test_wrong_password(self, db_path):
        auth.register_user("a@example.com", "long enough")
        with pytest.raises(AuthenticationError):
            auth.authenticate("a@example.com", "wrong password")

    def test_unknown_email(self, db_path):
        with pytest.raises(AuthenticationError):
            auth.authenticate("ghost@example.com", "whatever123")

    def test_get_user_missing(self, db_path):
        with pytest.raises(AuthenticationError):
            auth.get_user(12)
