"""
# swift-backend Application Entry Point

Builds the FastAPI application and serves it with uvicorn.

## Application Lifecycle

`lifespan()` connects to MongoDB **before** the port starts accepting requests, so a
missing or unreachable database stops the process at startup (fail-fast). On shutdown
the connection is closed.

## Request Handling

```
request -> ErrorIsolationMiddleware -> router -> route handler -> service -> MongoDB / source API
```

- `GET /load`, `GET /users/{id}`, `DELETE /users/{id}`, `DELETE /users`, `PUT /users`
- Any other method/path combination answers 404 `{"error": "Not Found"}`.
- Failures escaping a handler answer 500 `{"error": "Internal Server Error"}`.

## Running

```bash
swift-backend                       # console script
python -m swift_backend             # same thing
uvicorn swift_backend.main:create_app --factory --port 3000
```
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from swift_backend.config import Settings, load_settings
from swift_backend.database import DatabaseManager
from swift_backend.managers.logging_manager import get_logger, setup_logging
from swift_backend.middleware import ErrorIsolationMiddleware
from swift_backend.routes import load_router, users_router
from swift_backend.services.seed_service import SeedLoader
from swift_backend.utils.responses import PrettyJSONResponse, send_response

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB on startup and disconnect on shutdown."""
    db_manager: DatabaseManager = app.state.db_manager
    await db_manager.connect()
    logger.info("Application startup complete")
    try:
        yield
    finally:
        await db_manager.disconnect()
        logger.info("Application shutdown complete")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PrettyJSONResponse:
    """Render routing misses (unknown path or unsupported method) as a plain 404."""
    if exc.status_code in (404, 405):
        return send_response(404, {"error": "Not Found"})
    return send_response(exc.status_code, {"error": exc.detail})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment when omitted.

    Returns:
        FastAPI: The configured application. `app.state` holds `settings`,
            `db_manager` and `seed_loader`.
    """
    settings = settings or load_settings()
    setup_logging(settings.LOG_LEVEL)

    db_manager = DatabaseManager(settings)

    app = FastAPI(
        title="swift-backend",
        description="Seeds MongoDB from JSONPlaceholder and serves users with their posts and comments.",
        version="1.0.0",
        lifespan=lifespan,
        redirect_slashes=False,
        default_response_class=PrettyJSONResponse,
        debug=settings.DEBUG,
    )
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.seed_loader = SeedLoader(db_manager, settings)

    app.add_middleware(ErrorIsolationMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(users_router)
    app.include_router(load_router)

    return app


def run() -> None:
    """Load settings and serve the application."""
    settings = load_settings()
    app = create_app(settings)
    logger.info("Server running at http://%s:%d", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
