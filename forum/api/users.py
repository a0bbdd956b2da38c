"""User endpoints: registration, lookup, update, cascading delete and login."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from forum.api.auth import (
    OptionalRequestUser,
    RequestUser,
    ensure_admin,
    ensure_owner_or_admin,
)
from forum.api.params import parse_path_id
from forum.core.config import Settings, get_settings
from forum.core.database import get_db
from forum.core.security import create_access_token
from forum.models.user import ROLE_ADMIN
from forum.schemas.auth import LoginRequest, LoginResponse
from forum.schemas.common import MessageResponse
from forum.schemas.user import UserCreate, UserRead, UserUpdate
from forum.services import users as user_service
from forum.services.persistence import (
    DuplicateRecordError,
    ForeignKeyViolationError,
    PersistenceError,
)
from forum.services.validation import validate_login, validate_user, validate_user_update

logger = logging.getLogger(__name__)
router = APIRouter()

USERNAME_TAKEN = "Username is already taken"
USER_NOT_FOUND = "User not found"


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=USER_NOT_FOUND)


def _server_error(message: str, e: PersistenceError) -> HTTPException:
    logger.error("%s: %s", message, e.message, exc_info=e.cause or e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    *,
    body: Annotated[UserCreate, Body()] = UserCreate(),
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    caller: OptionalRequestUser,
) -> UserRead:
    """
    Register a new user.

    Requires username (3-20 alphanumeric), password (4-30) and role
    ('member' or 'admin'). With AUTH_ENABLED, creating an admin requires an
    admin token.
    """
    error = validate_user(body.username, body.password, body.role)
    if error:
        raise _bad_request(error)
    if settings.AUTH_ENABLED and body.role == ROLE_ADMIN:
        if caller is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required to create an admin",
            )
        ensure_admin(caller, "create an admin")

    try:
        if user_service.get_user_by_username(db, body.username) is not None:
            raise _bad_request(USERNAME_TAKEN)
        user = user_service.create_user(db, body.username, body.password, body.role)
    except DuplicateRecordError:
        raise _bad_request(USERNAME_TAKEN)
    except PersistenceError as e:
        raise _server_error("An error occurred while creating the user.", e) from e
    return UserRead.model_validate(user)


@router.post("/login", response_model=LoginResponse)
def login(
    *,
    body: Annotated[LoginRequest, Body()] = LoginRequest(),
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Check username and password and return the user plus a JWT access token.

    Unknown username and wrong password get the same 401 message.
    """
    error = validate_login(body.username, body.password)
    if error:
        raise _bad_request(error)
    try:
        user = user_service.authenticate(db, body.username, body.password)
    except PersistenceError as e:
        raise _server_error("An error occurred while validating login.", e) from e
    if user is None:
        logger.warning("Failed login for username=%s", body.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    token = create_access_token(sub=user.user_id, role=user.role)
    return LoginResponse(user=UserRead.model_validate(user), access_token=token)


@router.get("", response_model=list[UserRead])
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[UserRead]:
    try:
        users = user_service.list_users(db)
    except PersistenceError as e:
        raise _server_error("An error occurred while retrieving users.", e) from e
    return [UserRead.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Annotated[Session, Depends(get_db)]) -> UserRead:
    uid = parse_path_id(user_id, "user")
    try:
        user = user_service.get_user(db, uid)
    except PersistenceError as e:
        raise _server_error("An error occurred while fetching the user.", e) from e
    if user is None:
        raise _not_found()
    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: str,
    *,
    body: Annotated[UserUpdate, Body()] = UserUpdate(),
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> UserRead:
    """Update username, password and/or role. Only the fields sent are changed."""
    uid = parse_path_id(user_id, "user")
    error = validate_user_update(body.username, body.password, body.role)
    if error:
        raise _bad_request(error)
    ensure_owner_or_admin(caller, uid, "update this user")
    if body.role is not None:
        ensure_admin(caller, "change a role")

    try:
        user = user_service.get_user(db, uid)
        if user is None:
            raise _not_found()
        if body.username is not None and body.username != user.username:
            if user_service.get_user_by_username(db, body.username) is not None:
                raise _bad_request(USERNAME_TAKEN)
        user = user_service.update_user(
            db,
            user,
            username=body.username,
            password=body.password,
            role=body.role,
        )
    except DuplicateRecordError:
        raise _bad_request(USERNAME_TAKEN)
    except PersistenceError as e:
        raise _server_error("An error occurred while updating the user.", e) from e
    return UserRead.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> MessageResponse:
    """Delete a user and, atomically, every thread and reply that depends on it."""
    uid = parse_path_id(user_id, "user")
    ensure_owner_or_admin(caller, uid, "delete this user")
    try:
        if user_service.get_user(db, uid) is None:
            raise _not_found()
        deleted = user_service.delete_user_cascade(db, uid)
    except ForeignKeyViolationError as e:
        logger.warning("User delete blocked by related records: user_id=%s", uid)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Cannot delete user with related records",
        ) from e
    except PersistenceError as e:
        raise _server_error("Internal Server Error", e) from e
    if not deleted:
        raise _not_found()
    return MessageResponse(message="User deleted successfully")
