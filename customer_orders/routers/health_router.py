"""
Health check and monitoring router.

Provides endpoints for liveness and readiness probes.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import settings
from ..database import check_database, get_db, get_db_stats
from ..schemas import HealthResponse, ReadinessResponse

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
def health_check():
    """
    Basic health check.

    Always returns 200 OK if the service is running.
    Used by the Kubernetes liveness probe.
    """
    return HealthResponse(
        status="healthy",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        timestamp=_now(),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unavailable", "model": ReadinessResponse}},
    summary="Readiness check",
)
def readiness_check(db: Session = Depends(get_db)):
    """
    Readiness check.

    Returns 200 if the database answers, 503 otherwise.
    Used by the Kubernetes readiness probe.
    """
    checks = {"database": "healthy" if check_database(db) else "unhealthy"}
    ready = all(check == "healthy" for check in checks.values())
    body = ReadinessResponse(ready=ready, checks=checks, timestamp=_now())

    if not ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump()
        )
    return body


@router.get("/db/stats", summary="Database connection pool statistics")
def database_stats():
    return {"timestamp": _now(), "connection_pool": get_db_stats()}
