"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (users, films, genres, MPA ratings) exposes a
router defined in ``api/v1/endpoints``; business rules live in
``services`` and persistence in ``storage``.  Storage comes in two
interchangeable flavours (in‑memory maps and SQLite) selected by the
``STORAGE_BACKEND`` setting.
"""

from .main import app, create_app  # noqa: F401
