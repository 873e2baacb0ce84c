"""
StudySphere Backend: Request ID Middleware
============================================

What:  Tags each request with a short correlation id.
How:   Reuses an incoming X-Request-ID header or generates one, stores it in
       a ContextVar for loggers and error handlers, and echoes it back in
       the X-Request-ID response header.

Error bodies include the same id as `request_id`, so a failed checkout
reported by a customer can be matched to the server log line.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Incoming ids are copied into logs and headers; anything else is replaced
VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request id and returns it in the response headers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", "")
        if not VALID_REQUEST_ID.fullmatch(rid):
            rid = uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
