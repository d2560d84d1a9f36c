"""
Flipbook Backend — Access Log Middleware
==========================================

What:  One line on the `flipbook.access` logger per API request.
When:  Inside RequestIDMiddleware, so the line carries the request ID.

    GET /api/projects/k3j9x0a2qzmg8w1c9d 200 4.2ms [3f9c2a1b] from 10.0.0.7

Level by status: 5xx ERROR, 4xx WARNING, otherwise INFO. /health probes
are not logged. Bodies never are: project payloads carry passwords.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from flipbook.middleware.request_id import request_id_var

logger = logging.getLogger("flipbook.access")

UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        rid = request_id_var.get("")
        client = request.client.host if request.client else "-"
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            client,
            extra={"request_id": rid, "elapsed_ms": round(elapsed_ms, 2)},
        )
        return response
