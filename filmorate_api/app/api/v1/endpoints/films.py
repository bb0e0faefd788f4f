"""
Film endpoints for API v1.

CRUD for films, likes, and the list of popular films.  ``/popular``
is declared before ``/{film_id}`` so it is not captured as an id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status

from filmorate_api.app.api.deps import get_film_service
from filmorate_api.app.schemas.film import FilmCreate, FilmRead, FilmUpdate
from filmorate_api.app.services.film_service import FilmService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=FilmRead, status_code=status.HTTP_201_CREATED)
async def create_film(
    film: FilmCreate,
    service: FilmService = Depends(get_film_service),
) -> FilmRead:
    """Create a film.

    The body references its MPA rating and genres by id; the response
    carries their names.
    """
    logger.info("POST /films: %s", film.name)
    return await service.create_film(film)


@router.put("", response_model=FilmRead)
async def update_film(
    film: FilmUpdate,
    service: FilmService = Depends(get_film_service),
) -> FilmRead:
    logger.info("PUT /films: %s", film.id)
    return await service.update_film(film)


@router.get("", response_model=List[FilmRead])
async def list_films(service: FilmService = Depends(get_film_service)) -> List[FilmRead]:
    return await service.list_films()


@router.get("/popular", response_model=List[FilmRead])
async def get_popular_films(
    count: int = Query(10, description="How many films to return"),
    service: FilmService = Depends(get_film_service),
) -> List[FilmRead]:
    """Return the ``count`` most liked films, most liked first."""
    films = await service.get_popular_films(count)
    logger.info("GET /films/popular: returned %s of %s requested", len(films), count)
    return films


@router.get("/{film_id}", response_model=FilmRead)
async def get_film(
    film_id: int,
    service: FilmService = Depends(get_film_service),
) -> FilmRead:
    return await service.get_film(film_id)


@router.get("/{film_id}/likes", response_model=List[int])
async def get_likes(
    film_id: int,
    service: FilmService = Depends(get_film_service),
) -> List[int]:
    """List the ids of users who liked the film."""
    return await service.get_likes(film_id)


@router.put("/{film_id}/like/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def add_like(
    film_id: int,
    user_id: int,
    service: FilmService = Depends(get_film_service),
) -> None:
    await service.add_like(film_id, user_id)


@router.delete("/{film_id}/like/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_like(
    film_id: int,
    user_id: int,
    service: FilmService = Depends(get_film_service),
) -> None:
    await service.remove_like(film_id, user_id)
