"""
StudySphere Backend: Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 against the database and reports uptime.

    Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from app import __version__
from app.database import engine
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """Probes the database with a lightweight query and reports uptime."""
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
