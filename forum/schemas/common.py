"""Schemas shared by several endpoints."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation body for successful deletes."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")
