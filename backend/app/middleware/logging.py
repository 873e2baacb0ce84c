"""
StudySphere Backend: Request Logging Middleware
=================================================

What:  One access log line per request.
How:   Measures the time spent in the rest of the chain and logs method,
       path with query string, status, duration, request id and client IP.

Example:
    2024-05-02T10:15:03 [INFO] studysphere.access: GET /api/search?q=math 200 4.2ms [a1b2c3d4] from 127.0.0.1

Request bodies are never logged: checkout bodies carry names and phone numbers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("studysphere.access")

# Probed every few seconds by orchestrators; logging them drowns real traffic
SILENT_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request at a level chosen from its status code:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
