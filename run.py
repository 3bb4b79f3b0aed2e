"""Entry point for the Activity Registration API.

Launches the FastAPI application with Uvicorn.  Intended to be executed
from the project root, for example in a container where you only
specify a single Python file to run.

Configuration (DATABASE_URL, SECRET_KEY, ADMIN_TOKEN, HOST, PORT, ...)
is read from the environment; see
``activity_registration_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from activity_registration_api.app.core.config import settings
from activity_registration_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
