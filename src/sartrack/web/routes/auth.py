"""Authentication endpoints.

POST /auth/login returns the token in the body and also sets it as an
HttpOnly cookie so browser clients need no header handling.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from sartrack.core import auth
from sartrack.web.dependencies import get_config, get_current_user_id, get_token_service
from sartrack.web.schemas import Credentials, TokenResponse, UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(body: Credentials) -> UserResponse:
    """Create a user account."""
    user = auth.register_user(body.email, body.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(body: Credentials, request: Request, response: Response) -> TokenResponse:
    """Exchange credentials for an access token."""
    user = auth.authenticate(body.email, body.password)
    tokens = get_token_service(request)
    token = tokens.issue(user.id)
    max_age = int(tokens.ttl.total_seconds())

    auth_config = get_config(request).auth
    response.set_cookie(
        key=auth_config.cookie_name,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=auth_config.cookie_secure,
        samesite="lax",
    )
    return TokenResponse(
        access_token=token,
        expires_in=max_age,
        user=UserResponse.model_validate(user),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(request: Request) -> Response:
    """Clear the auth cookie."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(get_config(request).auth.cookie_name)
    return response


@router.get("/me", response_model=UserResponse)
def me(user_id: int = Depends(get_current_user_id)) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse.model_validate(auth.get_user(user_id))
