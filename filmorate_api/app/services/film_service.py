"""
Business logic for films, likes and the popularity ranking.

``FilmService`` validates film payloads, resolves their MPA rating and
genres against the reference storages and keeps track of which users
liked which film.  Popularity is derived on each request from the
current like counts; nothing is cached.
"""

import logging
from typing import List

from ..core.exceptions import ValidationError
from ..schemas.film import FilmBase, FilmCreate, FilmRead, FilmUpdate
from ..schemas.genre import GenreRead
from ..schemas.mpa import MpaRead
from ..storage.base import FilmStorage, GenreStorage, MpaStorage, UserStorage
from .validation import validate_film


logger = logging.getLogger(__name__)


class FilmService:
    """Сервис для управления фильмами и лайками."""

    def __init__(
        self,
        films: FilmStorage,
        users: UserStorage,
        genres: GenreStorage,
        mpa: MpaStorage,
    ) -> None:
        self.films = films
        self.users = users
        self.genres = genres
        self.mpa = mpa

    async def create_film(self, data: FilmCreate) -> FilmRead:
        """Validate and store a new film.

        Raises ``ValidationError`` for an invalid payload and
        ``NotFoundError`` when the rating or a genre does not exist.
        Nothing is stored in either case.
        """
        logger.debug("Начало создания фильма %r", data.name)
        validate_film(data)
        mpa = self._resolve_mpa(data)
        genres = self._resolve_genres(data)
        film = self.films.add_film(data, genres, mpa)
        logger.info("Фильм %s успешно создан", film.id)
        return film

    async def update_film(self, data: FilmUpdate) -> FilmRead:
        if data.id is None:
            raise ValidationError("Для обновления фильма необходимо указать id.")
        self.films.get_film(data.id)
        validate_film(data)
        mpa = self._resolve_mpa(data)
        genres = self._resolve_genres(data)
        film = self.films.update_film(data.id, data, genres, mpa)
        logger.info("Фильм %s успешно обновлён", film.id)
        return film

    async def list_films(self) -> List[FilmRead]:
        return self.films.list_films()

    async def get_film(self, film_id: int) -> FilmRead:
        logger.debug("Получение фильма по id %s", film_id)
        return self.films.get_film(film_id)

    async def add_like(self, film_id: int, user_id: int) -> None:
        """Record that ``user_id`` likes ``film_id``; repeating it changes nothing."""
        self.films.get_film(film_id)
        self.users.get_user(user_id)
        self.films.add_like(film_id, user_id)
        logger.info("Пользователь %s добавил лайк фильму %s", user_id, film_id)

    async def remove_like(self, film_id: int, user_id: int) -> None:
        self.films.get_film(film_id)
        self.users.get_user(user_id)
        self.films.remove_like(film_id, user_id)
        logger.info("Пользователь %s удалил лайк у фильма %s", user_id, film_id)

    async def get_likes(self, film_id: int) -> List[int]:
        return sorted(self.films.get_likes(film_id))

    async def get_popular_films(self, count: int = 10) -> List[FilmRead]:
        """Return up to ``count`` films ordered by like count, most liked first.

        Films with equal counts keep ascending id order.  Films nobody
        liked count as zero and still appear when ``count`` allows.
        """
        if count <= 0:
            raise ValidationError("Параметр count должен быть положительным.")
        counts = self.films.like_counts()
        # sorted() is stable, also with reverse=True
        ranked = sorted(
            self.films.list_films(),
            key=lambda film: counts.get(film.id, 0),
            reverse=True,
        )
        logger.debug("Получение %s популярных фильмов из %s", count, len(ranked))
        return ranked[:count]

    def _resolve_mpa(self, data: FilmBase) -> MpaRead:
        return self.mpa.get_mpa(data.mpa.id)

    def _resolve_genres(self, data: FilmBase) -> List[GenreRead]:
        """Look up each referenced genre once, dropping duplicates, ordered by id."""
        if not data.genres:
            return []
        genre_ids = sorted({genre.id for genre in data.genres})
        return [self.genres.get_genre(genre_id) for genre_id in genre_ids]
