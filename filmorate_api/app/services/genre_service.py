"""Read access to the genre reference table."""

import logging
from typing import List

from ..schemas.genre import GenreRead
from ..storage.base import GenreStorage


logger = logging.getLogger(__name__)


class GenreService:
    def __init__(self, genres: GenreStorage) -> None:
        self.genres = genres

    async def list_genres(self) -> List[GenreRead]:
        return self.genres.list_genres()

    async def get_genre(self, genre_id: int) -> GenreRead:
        logger.debug("Поиск жанра по id %s", genre_id)
        return self.genres.get_genre(genre_id)
