"""API routes mounted under API_PREFIX."""

from fastapi import APIRouter

from forum.api import health, replies, threads, users
from forum.schemas.common import ErrorResponse

# Documented error bodies; every error is rendered as {"error": <message>}.
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    404: {"model": ErrorResponse, "description": "Not found"},
    500: {"model": ErrorResponse, "description": "Database failure"},
}

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"], responses=ERROR_RESPONSES)
router.include_router(threads.router, prefix="/threads", tags=["threads"], responses=ERROR_RESPONSES)
router.include_router(replies.router, prefix="/replies", tags=["replies"], responses=ERROR_RESPONSES)
