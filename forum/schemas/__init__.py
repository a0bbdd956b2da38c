"""Pydantic request/response schemas."""

from forum.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from forum.schemas.common import ErrorResponse, MessageResponse
from forum.schemas.health import HealthResponse
from forum.schemas.reply import ReplyCreate, ReplyRead, ReplyUpdate
from forum.schemas.thread import ThreadCreate, ThreadRead, ThreadUpdate
from forum.schemas.user import UserCreate, UserRead, UserUpdate

__all__ = [
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ReplyCreate",
    "ReplyRead",
    "ReplyUpdate",
    "ThreadCreate",
    "ThreadRead",
    "ThreadUpdate",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
