"""
Storage layer.

``build_storages`` picks the implementation named by the
``storage_backend`` setting.  Services only see the abstract
contracts from ``storage.base``.
"""

from ..core.config import Settings
from ..core.db import get_database_path
from .base import FilmStorage, GenreStorage, MpaStorage, Storages, UserStorage
from .memory import build_memory_storages
from .sqlite import build_sqlite_storages


BACKENDS = ("memory", "sqlite")


def build_storages(settings: Settings) -> Storages:
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return build_memory_storages()
    if backend == "sqlite":
        return build_sqlite_storages(get_database_path(settings.database_url))
    raise ValueError(
        f"Unknown storage backend {settings.storage_backend!r}; expected one of {', '.join(BACKENDS)}"
    )


__all__ = [
    "BACKENDS",
    "FilmStorage",
    "GenreStorage",
    "MpaStorage",
    "Storages",
    "UserStorage",
    "build_storages",
]
