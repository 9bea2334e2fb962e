"""FastAPI dependencies for authentication.

Tokens are read from the Authorization bearer header, falling back to the
auth cookie set by POST /auth/login.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sartrack.config.app_config import AppConfig
from sartrack.core.auth import TokenService
from sartrack.errors import AuthenticationError

# auto_error=False so a missing header yields 401 rather than 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    """Resolve the authenticated user id or raise AuthenticationError."""
    config = get_config(request)
    token = credentials.credentials if credentials else request.cookies.get(config.auth.cookie_name)
    if not token:
        raise AuthenticationError("not authenticated")

    user_id = get_token_service(request).verify(token)
    request.state.user_id = user_id
    return user_id


def require_user_if_enabled(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int | None:
    """Router-level guard: enforce auth only when auth.required is set."""
    request.state.user_id = None
    if not get_config(request).auth.required:
        return None
    return get_current_user_id(request, credentials)
