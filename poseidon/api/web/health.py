"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from poseidon.api.deps import get_session_registry
from poseidon.core.config import settings
from poseidon.core.database import check_db_connected, get_db
from poseidon.core.sessions import SessionRegistry
from poseidon.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        active_sessions=registry.active_count(),
    )
