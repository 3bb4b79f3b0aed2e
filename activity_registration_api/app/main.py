"""
Main entrypoint for the Activity Registration API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  ``create_app`` builds and configures the
app; the module-level ``app`` uses the database configured in the
settings, so it can be served with::

    uvicorn activity_registration_api.app.main:app

Tests and tools pass their own ``Database`` to ``create_app``.
"""

from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import Database, init_db
from .core.logging_config import log_requests, setup_logging


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database : Optional[Database]
        Store handle used by every route.  Defaults to the database
        named by ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.database = database or Database.from_settings()

    app.middleware("http")(log_requests)
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        init_db(app.state.database)

    return app


app = create_app()
