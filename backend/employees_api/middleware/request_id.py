"""
Employees API — Request ID Middleware
=======================================

What:  Tags every request with a short correlation ID and echoes it back
       in the X-Request-ID response header.
Why:   Error responses are deliberately generic ({"error": "Internal Server
       Error"}); the ID is what ties a client report to the server log line
       holding the real cause.
How:   Reuses a client-supplied X-Request-ID when present, otherwise
       generates one. Stored in a ContextVar so exception handlers and
       loggers can read it without access to the request.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign or propagate X-Request-ID for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars is enough to correlate within one service's logs
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
