"""
Flipbook Backend — Health Check Route
=======================================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Answers {"status": "ok"} while the process serves, and reports
       MongoDB reachability separately via a ping.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status fields:
    status:    always "ok" (the process is up and routing requests)
    database:  "connected" when ping succeeds, "disconnected" otherwise
"""

import logging
import time

from fastapi import APIRouter
from pymongo.errors import PyMongoError

from flipbook import __version__
from flipbook.database import mongodb
from flipbook.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_status = "disconnected"
    try:
        if await mongodb.ping():
            db_status = "connected"
    except PyMongoError as e:
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status="ok",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
