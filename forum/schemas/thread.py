"""Request/response schemas for thread endpoints."""

from datetime import datetime

from pydantic import BaseModel


class ThreadCreate(BaseModel):
    title: str | None = None
    content: str | None = None
    user_id: int | None = None
    status: str | None = None


class ThreadUpdate(BaseModel):
    title: str | None = None
    content: str | None = None
    status: str | None = None


class ThreadRead(BaseModel):
    """Thread as stored; anonymous threads still carry user_id (suppression is display-only)."""

    thread_id: int
    title: str
    content: str
    user_id: int
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
