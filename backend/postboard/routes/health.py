"""
PostBoard Backend: Health Check Route
=====================================

What:  GET /health for container probes and load balancers.
How:   Served directly by FastAPI (not through the pipeline) so a broken
       chain cannot take the probe down with it.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: database backend configured but unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response
from sqlalchemy import text

from postboard import __version__
from postboard.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Probe the configured store and report record counts.

    The database check is a SELECT 1 on the application's engine; the
    in-memory backend is always reachable.
    """
    app_settings = request.app.state.settings
    stores = request.app.state.stores
    db_status = "not_configured"
    overall = "healthy"

    engine = request.app.state.engine
    if engine is not None:
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            db_status = "connected"
        except Exception as e:
            db_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: database unreachable: %s", str(e))

    counts = {"users": None, "posts": None}
    if overall == "healthy":
        for name in counts:
            counts[name] = await stores[name].count()

    if overall != "healthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        store_backend=app_settings.store_backend,
        database=db_status,
        users=counts["users"],
        posts=counts["posts"],
        uptime_seconds=round(time.time() - _start_time, 2),
    )
