"""Health check endpoints: bare liveness probe and API status with database connectivity."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from forum.core.config import APP_VERSION, Settings, get_settings
from forum.core.database import check_db_connected, get_db
from forum.schemas.health import HealthResponse

router = APIRouter()
liveness_router = APIRouter()


@liveness_router.get("/health", response_class=PlainTextResponse)
def liveness() -> str:
    """Liveness probe for load balancers; never touches the database."""
    return "OK"


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        version=APP_VERSION,
        database=db_status,
    )
