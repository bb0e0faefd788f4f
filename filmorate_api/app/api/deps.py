"""
FastAPI dependencies that hand services to the endpoints.

The storages are created once per application by ``create_app`` and
kept on ``app.state``; services are cheap wrappers built per request.
"""

from fastapi import Depends, Request

from ..services.film_service import FilmService
from ..services.genre_service import GenreService
from ..services.mpa_service import MpaService
from ..services.user_service import UserService
from ..storage.base import Storages


def get_storages(request: Request) -> Storages:
    return request.app.state.storages


def get_user_service(storages: Storages = Depends(get_storages)) -> UserService:
    return UserService(storages.users)


def get_film_service(storages: Storages = Depends(get_storages)) -> FilmService:
    return FilmService(storages.films, storages.users, storages.genres, storages.mpa)


def get_genre_service(storages: Storages = Depends(get_storages)) -> GenreService:
    return GenreService(storages.genres)


def get_mpa_service(storages: Storages = Depends(get_storages)) -> MpaService:
    return MpaService(storages.mpa)
