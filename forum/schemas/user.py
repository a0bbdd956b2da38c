"""Request/response schemas for user endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Registration payload. Fields are optional here so validation rules can report what is missing."""

    username: str | None = Field(default=None, description="3-20 alphanumeric characters")
    password: str | None = Field(default=None, description="4-30 characters")
    role: str | None = Field(default=None, description="'member' or 'admin'")


class UserUpdate(BaseModel):
    """Partial update; fields left out are unchanged, unknown fields are ignored."""

    username: str | None = None
    password: str | None = None
    role: str | None = None


class UserRead(BaseModel):
    """User as returned by the API (no password hash)."""

    user_id: int
    uuid: str
    username: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
