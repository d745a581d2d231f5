"""
Auth endpoints:
- POST /auth/register
- POST /auth/login
- GET /auth/me

Login responds with { token, token_type }. Registered accounts get the artist
role; team accounts are seeded from configuration.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from prism_portal.auth import (
    create_access_token,
    get_current_user,
    get_user_store,
    hash_password,
    verify_password,
)
from prism_portal.models import Role, User
from prism_portal.schemas import AuthLoginRequest, AuthRegisterRequest, AuthTokenResponse, UserResponse
from prism_portal.users import UserStore

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthTokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Creates a new artist account and returns a JWT token.",
    operation_id="register_user",
)
def register(req: AuthRegisterRequest, users: UserStore = Depends(get_user_store)) -> AuthTokenResponse:
    """Register a new user with username/password."""
    # Conflict on a duplicate username is rendered by the app's PortalError handler.
    user = users.create_user(username=req.username, password_hash=hash_password(req.password), role=Role.ARTIST)

    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    return AuthTokenResponse(token=token, token_type="bearer")


@router.post(
    "/login",
    response_model=AuthTokenResponse,
    summary="Login",
    description="Validates credentials and returns a JWT token.",
    operation_id="login_user",
)
def login(req: AuthLoginRequest, users: UserStore = Depends(get_user_store)) -> AuthTokenResponse:
    """Login an existing user."""
    user = users.get_by_username(req.username.strip())
    if not user or not verify_password(req.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "not_authenticated", "message": "Invalid username or password."},
        )

    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    return AuthTokenResponse(token=token, token_type="bearer")


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    description="Returns the authenticated user's profile.",
    operation_id="current_user",
)
def me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
