"""
RoboFriends — Liveness and Health Routes
==========================================

What:  GET / (plain liveness string) and GET /health (store status).
Why:   GET / is what the front end's hosting checks; /health is for
       container health checks and load balancers.
How:   /health runs SELECT 1 against the store and reports the result.

Status levels:
    - healthy:   store reachable
    - unhealthy: store unreachable (the API cannot serve any robot route)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from robofriends import __version__
from robofriends.schemas.robot import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()

LIVENESS_MESSAGE = "Backend server is running!"


@router.get("/", response_class=PlainTextResponse, summary="Liveness probe")
async def root() -> str:
    return LIVENESS_MESSAGE


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the robots store is reachable.",
)
async def health_check() -> HealthResponse:
    """
    Check the health of the service and its store.

    SELECT 1 is enough to prove the connection and query path work without
    touching the robots table.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        from robofriends.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
