"""Reply endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from forum.api.auth import RequestUser, ensure_admin, ensure_owner_or_admin
from forum.api.params import parse_path_id
from forum.core.database import get_db
from forum.schemas.common import MessageResponse
from forum.schemas.reply import ReplyCreate, ReplyRead, ReplyUpdate
from forum.services import replies as reply_service
from forum.services import threads as thread_service
from forum.services import users as user_service
from forum.services.persistence import PersistenceError
from forum.services.validation import validate_reply, validate_reply_update

logger = logging.getLogger(__name__)
router = APIRouter()

REPLY_NOT_FOUND = "Reply not found"
STATUS_CORRECT = "correct"


def _not_found(detail: str = REPLY_NOT_FOUND) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _server_error(message: str, e: PersistenceError) -> HTTPException:
    logger.error("%s: %s", message, e.message, exc_info=e.cause or e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


@router.post("", response_model=ReplyRead, status_code=status.HTTP_201_CREATED)
def create_reply(
    *,
    body: Annotated[ReplyCreate, Body()] = ReplyCreate(),
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> ReplyRead:
    """
    Attach a reply to a thread.

    Content must be 10-2000 characters; status is 'active', 'anonymous' or
    'correct'. The thread and the author must exist.
    """
    error = validate_reply(body.content, body.thread_id, body.user_id, body.status)
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
    ensure_owner_or_admin(caller, body.user_id, "post as another user")
    if body.status == STATUS_CORRECT:
        ensure_admin(caller, "mark a reply as correct")
    try:
        if thread_service.get_thread(db, body.thread_id) is None:
            raise _not_found("Thread not found")
        if user_service.get_user(db, body.user_id) is None:
            raise _not_found("User not found")
        reply = reply_service.create_reply(
            db, body.content, body.thread_id, body.user_id, body.status
        )
    except PersistenceError as e:
        raise _server_error("Failed to create reply", e) from e
    return ReplyRead.model_validate(reply)


@router.get("", response_model=list[ReplyRead])
def list_replies(db: Annotated[Session, Depends(get_db)]) -> list[ReplyRead]:
    try:
        replies = reply_service.list_replies(db)
    except PersistenceError as e:
        raise _server_error("Failed to retrieve replies", e) from e
    return [ReplyRead.model_validate(r) for r in replies]


@router.get("/thread/{thread_id}", response_model=list[ReplyRead])
def list_replies_for_thread(
    thread_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> list[ReplyRead]:
    """Replies of one thread, oldest first. An unknown thread yields an empty list."""
    tid = parse_path_id(thread_id, "thread")
    try:
        replies = reply_service.list_replies_for_thread(db, tid)
    except PersistenceError as e:
        raise _server_error("Failed to retrieve replies for thread", e) from e
    return [ReplyRead.model_validate(r) for r in replies]


@router.get("/{reply_id}", response_model=ReplyRead)
def get_reply(reply_id: str, db: Annotated[Session, Depends(get_db)]) -> ReplyRead:
    rid = parse_path_id(reply_id, "reply")
    try:
        reply = reply_service.get_reply(db, rid)
    except PersistenceError as e:
        raise _server_error("Failed to retrieve reply", e) from e
    if reply is None:
        raise _not_found()
    return ReplyRead.model_validate(reply)


@router.put("/{reply_id}", response_model=ReplyRead)
def update_reply(
    reply_id: str,
    *,
    body: Annotated[ReplyUpdate, Body()] = ReplyUpdate(),
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> ReplyRead:
    """Change a reply's status (and content, when sent). Moving into or out of 'correct' is admin-only."""
    rid = parse_path_id(reply_id, "reply")
    error = validate_reply_update(body.content, body.status)
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
    try:
        reply = reply_service.get_reply(db, rid)
        if reply is None:
            raise _not_found()
        if body.status != reply.status and body.status == STATUS_CORRECT:
            ensure_admin(caller, "mark a reply as correct")
        elif body.status != reply.status and reply.status == STATUS_CORRECT:
            ensure_admin(caller, "unmark a correct reply")
        else:
            ensure_owner_or_admin(caller, reply.user_id, "modify this reply")
        reply = reply_service.update_reply(db, reply, body.status, body.content)
    except PersistenceError as e:
        raise _server_error("Failed to update reply", e) from e
    return ReplyRead.model_validate(reply)


@router.delete("/{reply_id}", response_model=MessageResponse)
def delete_reply(
    reply_id: str,
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> MessageResponse:
    rid = parse_path_id(reply_id, "reply")
    try:
        reply = reply_service.get_reply(db, rid)
        if reply is None:
            raise _not_found()
        ensure_owner_or_admin(caller, reply.user_id, "delete this reply")
        deleted = reply_service.delete_reply(db, rid)
    except PersistenceError as e:
        raise _server_error("Failed to delete reply", e) from e
    if not deleted:
        raise _not_found()
    return MessageResponse(message="Reply deleted successfully")
