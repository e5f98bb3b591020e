"""
Main entrypoint for the FitnessBuddy API.

This module assembles the FastAPI application: logging, CORS, the
record store, error handlers and the API router.  ``create_app``
builds and configures the app, which is then instantiated at module
import time as ``app`` so it can be served directly::

    uvicorn fitness_buddy_api.app.main:app --reload

The store is an explicit object owned by the application
(``app.state.store``).  Tests and embedding code can pass their own
``ResourceStore`` to ``create_app``; otherwise a fresh one is created,
seeded with example data unless ``SEED_DATA`` is disabled.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Receive, Scope, Send

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.store import RecordNotFound, ResourceStore

logger = logging.getLogger(__name__)


class StripTrailingSlashMiddleware:
    """Serve ``/api/profiles/`` as ``/api/profiles`` instead of redirecting."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            path = scope["path"]
            if len(path) > 1 and path.endswith("/"):
                scope = dict(scope, path=path.rstrip("/") or "/")
        await self.app(scope, receive, send)


def create_app(
    store: Optional[ResourceStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[ResourceStore]
        Store to serve.  When omitted a new store is created, seeded
        according to ``settings.seed_data``.
    settings : Optional[Settings]
        Settings to use instead of the module‑level defaults.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    if store is None:
        store = ResourceStore.seeded() if settings.seed_data else ResourceStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base_url = f"http://localhost:{settings.port}"
        logger.info("FitnessBuddy Backend Server running at %s", base_url)
        logger.info("API Base URL: %s%s", base_url, settings.api_prefix)
        logger.info("Health Check: %s%s/health", base_url, settings.api_prefix)
        yield
        logger.info("FitnessBuddy Backend Server shutting down")

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(StripTrailingSlashMiddleware)

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.exception_handler(RecordNotFound)
    async def record_not_found_handler(request: Request, exc: RecordNotFound) -> JSONResponse:
        logger.debug("No %s with %s=%r", exc.kind.label.lower(), exc.field, exc.value)
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and known paths with an unsupported method are
        # both reported as a missing endpoint.
        if exc.status_code in (404, 405):
            logger.debug("No route for %s %s", request.method, request.url.path)
            return JSONResponse(status_code=404, content={"message": "Endpoint not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
