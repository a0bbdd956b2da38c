"""Request/response schemas for reply endpoints."""

from datetime import datetime

from pydantic import BaseModel


class ReplyCreate(BaseModel):
    content: str | None = None
    thread_id: int | None = None
    user_id: int | None = None
    status: str | None = None


class ReplyUpdate(BaseModel):
    """status is required by the handler; content is optional."""

    content: str | None = None
    status: str | None = None


class ReplyRead(BaseModel):
    reply_id: int
    content: str
    thread_id: int
    user_id: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
