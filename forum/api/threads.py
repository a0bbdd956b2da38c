"""Thread endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from forum.api.auth import RequestUser, ensure_owner_or_admin
from forum.api.params import parse_path_id
from forum.core.database import get_db
from forum.schemas.common import MessageResponse
from forum.schemas.thread import ThreadCreate, ThreadRead, ThreadUpdate
from forum.services import threads as thread_service
from forum.services import users as user_service
from forum.services.persistence import PersistenceError
from forum.services.validation import validate_thread, validate_thread_update

logger = logging.getLogger(__name__)
router = APIRouter()

THREAD_NOT_FOUND = "Thread not found"


def _server_error(message: str, e: PersistenceError) -> HTTPException:
    logger.error("%s: %s", message, e.message, exc_info=e.cause or e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message,
    )


@router.post("", response_model=ThreadRead, status_code=status.HTTP_201_CREATED)
def create_thread(
    *,
    body: Annotated[ThreadCreate, Body()] = ThreadCreate(),
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> ThreadRead:
    """
    Create a thread.

    Title must be 10-100 characters and content 20-2000. status is free text;
    the client sends 'active' or 'anonymous'.
    """
    error = validate_thread(body.title, body.content, body.user_id, body.status)
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
    ensure_owner_or_admin(caller, body.user_id, "post as another user")
    try:
        if user_service.get_user(db, body.user_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        thread = thread_service.create_thread(
            db, body.title, body.content, body.user_id, body.status
        )
    except PersistenceError as e:
        raise _server_error("Failed to create thread", e) from e
    return ThreadRead.model_validate(thread)


@router.get("", response_model=list[ThreadRead])
def list_threads(db: Annotated[Session, Depends(get_db)]) -> list[ThreadRead]:
    try:
        threads = thread_service.list_threads(db)
    except PersistenceError as e:
        raise _server_error("Failed to retrieve threads", e) from e
    return [ThreadRead.model_validate(t) for t in threads]


@router.get("/{thread_id}", response_model=ThreadRead)
def get_thread(thread_id: str, db: Annotated[Session, Depends(get_db)]) -> ThreadRead:
    tid = parse_path_id(thread_id, "thread")
    try:
        thread = thread_service.get_thread(db, tid)
    except PersistenceError as e:
        raise _server_error("Failed to retrieve thread", e) from e
    if thread is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=THREAD_NOT_FOUND)
    return ThreadRead.model_validate(thread)


@router.put("/{thread_id}", response_model=ThreadRead)
def update_thread(
    thread_id: str,
    *,
    body: Annotated[ThreadUpdate, Body()] = ThreadUpdate(),
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> ThreadRead:
    """Replace title, content and status; all three are required."""
    tid = parse_path_id(thread_id, "thread")
    error = validate_thread_update(body.title, body.content, body.status)
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
    try:
        thread = thread_service.get_thread(db, tid)
        if thread is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=THREAD_NOT_FOUND)
        ensure_owner_or_admin(caller, thread.user_id, "modify this thread")
        thread = thread_service.update_thread(db, thread, body.title, body.content, body.status)
    except PersistenceError as e:
        raise _server_error("Failed to update thread", e) from e
    return ThreadRead.model_validate(thread)


@router.delete("/{thread_id}", response_model=MessageResponse)
def delete_thread(
    thread_id: str,
    db: Annotated[Session, Depends(get_db)],
    caller: RequestUser,
) -> MessageResponse:
    """Delete a thread together with its replies."""
    tid = parse_path_id(thread_id, "thread")
    try:
        thread = thread_service.get_thread(db, tid)
        if thread is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=THREAD_NOT_FOUND)
        ensure_owner_or_admin(caller, thread.user_id, "delete this thread")
        deleted = thread_service.delete_thread_cascade(db, tid)
    except PersistenceError as e:
        raise _server_error("Failed to delete thread", e) from e
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=THREAD_NOT_FOUND)
    return MessageResponse(message="Thread deleted successfully")
