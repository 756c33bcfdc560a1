"""
Main entrypoint for the Event Registration API.

This module assembles the FastAPI application, sets up logging,
registers the exception handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn event_registration_api.app.main:app --reload
"""

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .core.errors import register_exception_handlers
from .api.v1.router import router as v1_router
from .core.db import init_db


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that imports below can
    # safely log messages.
    # DEBUG only raises verbosity; error responses stay opaque either way.
    level = "DEBUG" if settings.debug else settings.log_level
    setup_logging(level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    register_exception_handlers(app)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and brings the schema up
        # to date.
        init_db()

    return app


app = create_app()
