"""
Employees API — Health Check Route
====================================

What:  Health check endpoint for container and load balancer probes.
How:   Runs SELECT 1 through the pool and reports the outcome.

Status levels:
    - healthy:   database answered (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status

from employees_api import __version__
from employees_api.database import Database, get_database
from employees_api.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(
    response: Response,
    db: Database = Depends(get_database),
) -> HealthResponse:
    """Report service status; 503 when the database does not answer SELECT 1."""
    db_status = "connected"
    overall = "healthy"

    if not await db.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
