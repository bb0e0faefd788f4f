"""
Main entrypoint for the Filmorate API.

This module assembles the FastAPI application, sets up logging,
builds the storages, registers exception handlers and includes the
versioned routers.  The ``create_app`` function builds and configures
the app, which is then instantiated at module import time as ``app``,
e.g.::

    uvicorn filmorate_api.app.main:app --reload

Error mapping lives here and only here: ``ValidationError`` and
malformed requests become 400, ``NotFoundError`` becomes 404 and
anything else 500.  Response bodies have the shape
``{"error": ..., "errorMessage": ...}``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path, init_db
from .core.exceptions import FilmorateError, NotFoundError, ValidationError
from .core.logging_config import setup_logging
from .storage import build_storages


logger = logging.getLogger(__name__)


def _error_body(kind: str, message: str) -> dict:
    return {"error": kind, "errorMessage": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-to-status mapping to ``app``."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Ошибка валидации: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(exc.kind, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])} - {error['msg']}"
            for error in exc.errors()
        )
        logger.warning("Ошибка валидации входящих аргументов: %s", details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Ошибка валидации запроса", f"Некорректные данные: {details}"),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning("Ресурс не найден: %s", exc.message)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(exc.kind, exc.message),
        )

    @app.exception_handler(FilmorateError)
    async def handle_filmorate_error(request: Request, exc: FilmorateError) -> JSONResponse:
        logger.exception("Необработанная ошибка: %s", exc.message, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(exc.kind, exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Произошла непредвиденная ошибка на сервере: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                FilmorateError.kind,
                "Произошла непредвиденная ошибка. Пожалуйста, попробуйте позже.",
            ),
        )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the ones read from the environment
        at import time.  Tests pass their own to pick the storage
        backend and database file.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    # Initialise logging before anything else so that the setup below
    # can log.
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # The SQLite schema and reference data must exist before the
        # first request; the in-memory backend seeds itself.
        if app_settings.storage_backend.lower() == "sqlite":
            init_db(get_database_path(app_settings.database_url))
        logger.info(
            "%s %s started with %s storage",
            app_settings.project_name,
            app_settings.api_version,
            app_settings.storage_backend,
        )
        yield

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.storages = build_storages(app_settings)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=app_settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
