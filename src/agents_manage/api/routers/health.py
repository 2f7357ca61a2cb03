"""Health check endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from agents_manage import __version__
from agents_manage.db.session import get_session_manager

from ..exceptions import APIError

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = __version__


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status.

    Returns:
        Health status response
    """
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=HealthResponse)
async def readiness_check() -> HealthResponse:
    """Check that the database is reachable.

    Returns:
        Readiness status response

    Raises:
        APIError: 503 if the database does not answer
    """
    try:
        await get_session_manager().ping()
    except (SQLAlchemyError, OSError, RuntimeError) as exc:
        raise APIError("Database unavailable", "service_unavailable", 503) from exc
    return HealthResponse(status="ready")
