"""
Top‑level router for version 1 of the API.

This router aggregates the domain‑specific routers under a unified
prefix.  When new domains are introduced, update this file to include
their routers.
"""

from fastapi import APIRouter

from .endpoints import films, genres, mpa, users


router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(films.router, prefix="/films", tags=["films"])
router.include_router(genres.router, prefix="/genres", tags=["genres"])
router.include_router(mpa.router, prefix="/mpa", tags=["mpa"])
