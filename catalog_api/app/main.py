"""
Main entrypoint for the Catalog API.

This module assembles the FastAPI application: it sets up logging,
installs the JSON error handlers, includes the resource routers and
creates the database schema on startup.  ``create_app`` builds the
app from a ``Settings`` instance (the environment‑derived ``settings``
by default), and the module‑level ``app`` lets uvicorn find it::

    uvicorn catalog_api.app.main:app --reload

Interactive documentation is served at ``/api-docs``.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from .api.router import router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path, init_db
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)

WELCOME_PAGE = """
<h1>Welcome to the Catalog API</h1>
<p>Manage categories and products, and register or log in users.</p>
<a href="/api-docs">API documentation</a>
"""


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to build the app with.  Defaults to the settings
        read from the environment at import time.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        docs_url="/api-docs",
        redoc_url=None,
    )
    # Dependencies read these instead of module globals, so several apps
    # (e.g. one per test) can run side by side.
    app.state.settings = settings
    app.state.database_path = get_database_path(settings)

    register_exception_handlers(app)
    app.include_router(router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def welcome() -> str:
        return WELCOME_PAGE

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db(app.state.database_path)
        logger.info("Database ready at %s", app.state.database_path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
