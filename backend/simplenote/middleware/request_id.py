"""
SimpleNote: Request ID Middleware
=================================

What:  Tags every request with a short correlation id.
How:   Reuses a client-supplied X-Request-ID header or generates one, stores
       it in a ContextVar for loggers and error handlers, and echoes it back
       in the response headers.
When:  Outermost middleware, so the access log and every handler see the id.

Where the id ends up:
    - X-Request-ID response header (every response, errors included)
    - `request_id` field of every JSON error body
    - the [xxxxxxxx] tag in access-log and error-log lines
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# ── Context Variable ──────────────────────────────────────────────────────
# What: Coroutine-local storage for the current request id
# Why ContextVar: requests run concurrently on one event loop thread, so a
# threading.local would be shared between them; each task gets its own copy
# of a ContextVar
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    # 8 hex chars: enough to tell requests apart in one log, short to read
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns `request.state.request_id` and the X-Request-ID response header.

    Behavior:
        1. Use the client's X-Request-ID header when it is non-empty
        2. Otherwise generate a new id
        3. Store it in the ContextVar (loggers) and request.state (handlers)
        4. Add it to the response headers

    Client-supplied ids are accepted so the page's fetch calls can be matched
    to server log lines.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # An empty header counts as absent
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()

        # ContextVar for loggers, request.state for handlers that run after
        # the var is reset (the catch-all 500 handler in main.py)
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            # Restore the previous value so nothing outside this request
            # picks the id up
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
