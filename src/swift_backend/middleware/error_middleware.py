"""
Request isolation middleware.

Wraps every request so that a failure escaping a route handler becomes a generic 500
response instead of a broken connection; the server keeps serving later requests.
Requests with no method or path are rejected with a 400 before they reach the router.
ASGI servers always supply both, so in practice this only guards hand-built scopes.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from swift_backend.managers.logging_manager import get_logger
from swift_backend.utils.responses import INTERNAL_SERVER_ERROR, send_response

logger = get_logger(prefix="[Server]")


class ErrorIsolationMiddleware(BaseHTTPMiddleware):
    """Per-request failure isolation."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.method or not request.url.path:
            return send_response(400, {"error": "Bad Request"})

        try:
            return await call_next(request)
        except Exception as e:
            logger.error("Server error on %s %s: %s", request.method, request.url.path, e, exc_info=True)
            return send_response(500, {"error": INTERNAL_SERVER_ERROR})
