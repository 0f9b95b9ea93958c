"""
Response helpers shared by the routes and the error middleware.

Every response body is a pretty-printed JSON document. Failures carry a single
``error`` (or ``message``) string; internal details are only ever logged.
"""

import json
from typing import Any

from bson import ObjectId
from starlette.responses import JSONResponse

from swift_backend.managers.logging_manager import get_logger

logger = get_logger(prefix="[HTTP]")

INTERNAL_SERVER_ERROR = "Internal Server Error"


class PrettyJSONResponse(JSONResponse):
    """JSON response rendered with a two-space indent."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
        ).encode("utf-8")


def serialize_document(value: Any) -> Any:
    """Recursively convert MongoDB documents into JSON-safe values (ObjectId -> hex string)."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(item) for item in value]
    return value


def send_response(status_code: int, data: Any) -> PrettyJSONResponse:
    return PrettyJSONResponse(status_code=status_code, content=serialize_document(data))


def handle_error(err: BaseException) -> PrettyJSONResponse:
    """Log an unexpected failure and answer with the generic 500 body."""
    logger.error("Error: %s", err, exc_info=err)
    return send_response(500, {"error": INTERNAL_SERVER_ERROR})
