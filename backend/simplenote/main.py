"""
SimpleNote: FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` takes its settings, note store and page renderer as
       arguments (building defaults when omitted), attaches them to
       `app.state`, and registers middleware, error handlers and routes.
Who:   uvicorn imports `simplenote.main:app`; tests call `create_app()`
       with an in-memory store.

Application Architecture:
    ┌─────────────────────────────────────────────┐
    │                 FastAPI App                 │
    │                                             │
    │  Middleware:  Request ID → Logging          │
    │                                             │
    │  Routes:                                    │
    │    GET /          GET|POST /api/notes       │
    │    DELETE /api/notes/{id}    GET /health    │
    │                                             │
    │  Error handling:                            │
    │    SimpleNoteError → status of its kind     │
    │    anything else   → 500                    │
    └─────────────────────────────────────────────┘

Lifecycle:
    Construction: page template is parsed (StartupError if missing/broken)
    Startup:      logging configured, notes table ensured (StartupError aborts)
    Shutdown:     connection pool disposed
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from simplenote import __version__
from simplenote.config import Settings, settings as default_settings
from simplenote.exceptions import ErrorKind, SimpleNoteError, StartupError
from simplenote.middleware.logging import RequestLoggingMiddleware
from simplenote.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from simplenote.routes import health, notes, pages
from simplenote.services.note_store import NoteStore, SQLNoteStore
from simplenote.services.page import PageRenderer

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (container runtimes collect it)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers chatter at INFO on every request/statement
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, then ensure the notes table exists.
              A StartupError propagates and uvicorn exits.
    Shutdown: dispose the store's connection pool.
    """
    settings: Settings = app.state.settings
    store: NoteStore = app.state.store

    setup_logging(settings.log_level)
    logger.info("SimpleNote %s starting up...", __version__)

    try:
        await store.ensure_schema()
    except StartupError as e:
        logger.critical("Startup failed: %s | Context: %s", e.message, e.context)
        await store.close()
        raise

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("SimpleNote shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to JSON error responses.

        SimpleNoteError → STATUS_CODES[exc.kind]
        Exception       → 500 (logged with traceback)

    Response bodies only ever carry the exception's client-safe message;
    `context` is logged server-side.
    """

    @app.exception_handler(SimpleNoteError)
    async def handle_simplenote_error(request: Request, exc: SimpleNoteError):
        rid = request_id_var.get("")
        if exc.kind is ErrorKind.VALIDATION:
            logger.warning("[%s] Validation error: %s", rid, exc.message)
        else:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.kind.value, exc.message, exc.context)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.kind.value,
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Starlette runs this handler in ServerErrorMiddleware, outside
        # RequestIDMiddleware: the ContextVar is already reset and the
        # response header has to be set here
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[NoteStore] = None,
    page: Optional[PageRenderer] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; the environment-loaded `settings` by default.
        store:    Note storage; a SQLNoteStore on settings.database_url by default.
        page:     Page renderer; built from settings.template_dir by default.

    Raises:
        StartupError: the page template is missing or does not parse.
    """
    settings = settings or default_settings
    if page is None:
        page = PageRenderer(settings.template_dir, settings.template_name)
    if store is None:
        store = SQLNoteStore.from_settings(settings)

    app = FastAPI(
        title="SimpleNote API",
        description="Create, list and delete short text notes.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.page = page

    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve `simplenote.main:app` on HOST:PORT."""
    setup_logging(default_settings.log_level)
    uvicorn.run(
        "simplenote.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


app = create_app()
