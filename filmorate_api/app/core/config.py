"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration at all.  Tests build their own
``Settings`` instances and pass them to ``create_app``.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Filmorate API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Which storage implementation backs the services: ``sqlite`` keeps
    # data in the database file below, ``memory`` keeps it in process
    # local maps and loses it on restart.
    storage_backend: str = os.getenv("STORAGE_BACKEND", "sqlite")

    # Path to the SQLite database file.  A relative path is resolved
    # relative to the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "filmorate.db")

    # Routes are served from the root (``/users``, ``/films``) unless a
    # prefix such as ``/api/v1`` is configured.
    api_prefix: str = os.getenv("API_PREFIX", "")

    host: str = os.getenv("APP_HOST", "0.0.0.0")
    port: int = int(os.getenv("APP_PORT", "8080"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
