"""Genre endpoints for API v1 (read only)."""

from typing import List

from fastapi import APIRouter, Depends

from filmorate_api.app.api.deps import get_genre_service
from filmorate_api.app.schemas.genre import GenreRead
from filmorate_api.app.services.genre_service import GenreService


router = APIRouter()


@router.get("", response_model=List[GenreRead])
async def list_genres(service: GenreService = Depends(get_genre_service)) -> List[GenreRead]:
    return await service.list_genres()


@router.get("/{genre_id}", response_model=GenreRead)
async def get_genre(
    genre_id: int,
    service: GenreService = Depends(get_genre_service),
) -> GenreRead:
    return await service.get_genre(genre_id)
