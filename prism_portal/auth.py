"""
Authentication utilities: password hashing, JWT handling and role gating.

Clients send:
- Authorization: Bearer <token>   (token from POST /auth/login)

Submission listing and review operations require the `team` role; intake is public.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from prism_portal.errors import NotFound, PermissionDenied
from prism_portal.models import Role, User
from prism_portal.users import UserStore

logger = logging.getLogger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
_bearer_scheme = HTTPBearer(auto_error=False)


def _jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise RuntimeError("JWT_SECRET env var is required.")
    return secret


def _jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def _jwt_exp_minutes() -> int:
    try:
        return int(os.getenv("JWT_EXPIRES_MINUTES", "4320"))  # default: 3 days
    except ValueError:
        return 4320


# PUBLIC_INTERFACE
def hash_password(password: str) -> str:
    """Hash a plain-text password."""
    return _pwd_context.hash(password)


# PUBLIC_INTERFACE
def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plain-text password against a hash."""
    return _pwd_context.verify(password, password_hash)


# PUBLIC_INTERFACE
def create_access_token(*, user_id: int, username: str, role: Role) -> str:
    """
    Create a signed JWT access token.

    Token contains:
      - sub: user id (string)
      - username
      - role
      - iat, exp

    Returns:
        JWT string.
    """
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=_jwt_exp_minutes())
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "role": role.value,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, _jwt_secret(), algorithm=_jwt_algorithm())


def _decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, _jwt_secret(), algorithms=[_jwt_algorithm()])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "not_authenticated", "message": "Invalid or expired token."},
        )


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "not_authenticated", "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


# PUBLIC_INTERFACE
def get_user_store(request: Request) -> UserStore:
    """FastAPI dependency returning the identity store owned by the app."""
    return request.app.state.users


# PUBLIC_INTERFACE
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    users: UserStore = Depends(get_user_store),
) -> User:
    """
    FastAPI dependency that returns the authenticated user.

    Raises 401 if missing/invalid token, or user doesn't exist.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated.")

    payload = _decode_token(credentials.credentials)
    sub = payload.get("sub")
    if not sub:
        raise _unauthorized("Invalid token payload.")

    try:
        user_id = int(str(sub))
    except ValueError:
        raise _unauthorized("Invalid token payload.")

    try:
        return users.get(user_id)
    except NotFound:
        raise _unauthorized("User not found.")


# PUBLIC_INTERFACE
def require_team_member(user: User = Depends(get_current_user)) -> User:
    """
    FastAPI dependency that only lets team members through.

    Raises 403 for authenticated users without the team role.
    """
    if not user.is_team_member:
        logger.warning("access_denied: user_id=%s role=%s", user.id, user.role.value)
        raise PermissionDenied("Access denied.")
    return user


# PUBLIC_INTERFACE
def seed_team_member(users: UserStore) -> Optional[User]:
    """
    Create the team account named by TEAM_USERNAME / TEAM_PASSWORD, if both are set.

    Returns the seeded user, or None when the variables are missing.
    """
    username = (os.getenv("TEAM_USERNAME") or "").strip()
    password = os.getenv("TEAM_PASSWORD") or ""
    if not (username and password):
        logger.warning("team_seed_skipped: TEAM_USERNAME/TEAM_PASSWORD not set; no team account exists")
        return None

    existing = users.get_by_username(username)
    if existing is not None:
        return existing

    user = users.create_user(username=username, password_hash=hash_password(password), role=Role.TEAM)
    logger.info("team_seeded: username=%s", username)
    return user
