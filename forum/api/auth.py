"""Per-request caller resolution and the admin/owner role checks."""

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from forum.core.config import Settings, get_settings
from forum.core.database import get_db
from forum.core.security import decode_access_token
from forum.models import User
from forum.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_request_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser | None:
    """
    Dependency: the caller identified by the Bearer JWT from login.

    Returns None when AUTH_ENABLED is False (open API, no role checks).
    Otherwise raises 401 if the token is missing, invalid, or names an unknown user.
    """
    if not settings.AUTH_ENABLED:
        return None
    if credentials is None:
        raise _unauthorized("Not authenticated")
    return _resolve_caller(credentials, db)


def get_optional_request_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CurrentUser | None:
    """Like get_request_user, but an anonymous caller (no token) is allowed and yields None."""
    if not settings.AUTH_ENABLED or credentials is None:
        return None
    return _resolve_caller(credentials, db)


def _resolve_caller(
    credentials: HTTPAuthorizationCredentials, db: Session
) -> CurrentUser:
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")
    return CurrentUser.model_validate(user)


RequestUser = Annotated[CurrentUser | None, Depends(get_request_user)]
OptionalRequestUser = Annotated[CurrentUser | None, Depends(get_optional_request_user)]


def ensure_admin(caller: CurrentUser | None, action: str) -> None:
    """Raise 403 unless caller is an admin. No-op when auth is disabled (caller is None)."""
    if caller is None or caller.is_admin:
        return
    logger.warning("Admin check failed: user_id=%s action=%s", caller.user_id, action)
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=f"Admin access required to {action}",
    )


def ensure_owner_or_admin(caller: CurrentUser | None, owner_id: int, action: str) -> None:
    """Raise 403 unless caller owns the row or is an admin. No-op when auth is disabled."""
    if caller is None or caller.is_admin or caller.user_id == owner_id:
        return
    logger.warning(
        "Ownership check failed: user_id=%s owner_id=%s action=%s",
        caller.user_id,
        owner_id,
        action,
    )
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=f"Not allowed to {action}",
    )
