"""Entry point for the Filmorate API server.

This script launches the FastAPI application under Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration such as the storage backend, database path and log level
is read from environment variables (see
``filmorate_api/app/core/config.py``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from filmorate_api.app.core.config import settings
from filmorate_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted.

    Host and port are read from ``APP_HOST`` and ``APP_PORT``.
    Defaults are ``0.0.0.0`` and ``8080``.
    """
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    try:
        await server.serve()
    except Exception:
        logging.exception("Exception in API server")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
