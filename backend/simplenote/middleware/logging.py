"""
SimpleNote: Request Logging Middleware
======================================

What:  One access-log line per request: method, path, status, duration,
       request id and client address.
How:   Level follows the status class: 5xx → ERROR, 4xx → WARNING,
       everything else → INFO. Request bodies are never logged.
When:  Runs inside RequestIDMiddleware, so the id is already set.

Log line:
    POST /api/notes 200 4.2ms [a1b2c3d4] from 127.0.0.1

Uvicorn's own access log is turned down to WARNING in setup_logging(); it
has no request id and no duration.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from simplenote.middleware.request_id import request_id_var

logger = logging.getLogger("simplenote.access")

# Polled by orchestrators every few seconds; logging them buries real traffic
QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    """
    5xx → ERROR   (server fault, needs a look)
    4xx → WARNING (client sent something the API rejects)
    else → INFO
    """
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging on the `simplenote.access` logger; /health is skipped."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        # perf_counter: monotonic and sub-microsecond, unlike time.time()
        start_time = time.perf_counter()
        # request.client is None under in-process test transports
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        # Unexpected exceptions propagate past this point and are logged by
        # the catch-all handler instead
        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            # Structured copies of the same fields for JSON log formatters
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
