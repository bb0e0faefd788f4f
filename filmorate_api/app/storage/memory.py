"""
In‑memory storage.

The user and film storages own their maps, an identifier counter
and a re‑entrant lock; genres and ratings are fixed at
construction.  Every public method of a mutable storage holds the
lock for its whole check/read/mutate sequence, so concurrent requests
served from threads observe each call as atomic.  Records are kept
as immutable copies; callers never get a reference into the maps.
"""

import logging
import threading
from typing import Dict, Iterable, List, Set, Tuple

from ..core.exceptions import NotFoundError
from ..schemas.film import FilmBase, FilmRead
from ..schemas.genre import DEFAULT_GENRES, GenreRead
from ..schemas.mpa import MpaRating, MpaRead
from ..schemas.user import UserBase, UserRead
from .base import FilmStorage, GenreStorage, MpaStorage, Storages, UserStorage


logger = logging.getLogger(__name__)


def _edge(user_id: int, friend_id: int) -> Tuple[int, int]:
    return (user_id, friend_id) if user_id < friend_id else (friend_id, user_id)


class InMemoryUserStorage(UserStorage):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: Dict[int, UserRead] = {}
        self._friendships: Set[Tuple[int, int]] = set()
        self._next_id = 1

    def add_user(self, user: UserBase) -> UserRead:
        with self._lock:
            record = UserRead(
                id=self._next_id,
                email=user.email,
                login=user.login,
                name=user.name,
                birthday=user.birthday,
            )
            self._users[record.id] = record
            self._next_id += 1
        logger.debug("Создан пользователь %s", record.id)
        return record.model_copy()

    def update_user(self, user_id: int, user: UserBase) -> UserRead:
        with self._lock:
            if user_id not in self._users:
                raise NotFoundError(f"Пользователь с id {user_id} не найден.")
            record = UserRead(
                id=user_id,
                email=user.email,
                login=user.login,
                name=user.name,
                birthday=user.birthday,
            )
            self._users[user_id] = record
        return record.model_copy()

    def list_users(self) -> List[UserRead]:
        with self._lock:
            return [self._users[key].model_copy() for key in sorted(self._users)]

    def get_user(self, user_id: int) -> UserRead:
        with self._lock:
            record = self._users.get(user_id)
            if record is None:
                raise NotFoundError(f"Пользователь с id {user_id} не найден.")
            return record.model_copy()

    def get_users(self, user_ids: Iterable[int]) -> List[UserRead]:
        with self._lock:
            return [
                self._users[key].model_copy()
                for key in sorted(set(user_ids))
                if key in self._users
            ]

    def add_friend(self, user_id: int, friend_id: int) -> None:
        with self._lock:
            self._friendships.add(_edge(user_id, friend_id))

    def remove_friend(self, user_id: int, friend_id: int) -> None:
        with self._lock:
            self._friendships.discard(_edge(user_id, friend_id))

    def get_friend_ids(self, user_id: int) -> Set[int]:
        with self._lock:
            friend_ids = set()
            for low, high in self._friendships:
                if low == user_id:
                    friend_ids.add(high)
                elif high == user_id:
                    friend_ids.add(low)
            return friend_ids


class InMemoryFilmStorage(FilmStorage):
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._films: Dict[int, FilmRead] = {}
        self._likes: Dict[int, Set[int]] = {}
        self._next_id = 1

    def add_film(self, film: FilmBase, genres: List[GenreRead], mpa: MpaRead) -> FilmRead:
        with self._lock:
            record = self._build(self._next_id, film, genres, mpa)
            self._films[record.id] = record
            self._likes[record.id] = set()
            self._next_id += 1
        logger.debug("Добавлен фильм %s", record.id)
        return record.model_copy(deep=True)

    def update_film(
        self, film_id: int, film: FilmBase, genres: List[GenreRead], mpa: MpaRead
    ) -> FilmRead:
        with self._lock:
            if film_id not in self._films:
                raise NotFoundError(f"Фильм с id {film_id} не найден.")
            record = self._build(film_id, film, genres, mpa)
            self._films[film_id] = record
        return record.model_copy(deep=True)

    def list_films(self) -> List[FilmRead]:
        with self._lock:
            return [self._films[key].model_copy(deep=True) for key in sorted(self._films)]

    def get_film(self, film_id: int) -> FilmRead:
        with self._lock:
            return self._require(film_id).model_copy(deep=True)

    def add_like(self, film_id: int, user_id: int) -> None:
        with self._lock:
            self._require(film_id)
            self._likes[film_id].add(user_id)

    def remove_like(self, film_id: int, user_id: int) -> None:
        with self._lock:
            self._require(film_id)
            self._likes[film_id].discard(user_id)

    def get_likes(self, film_id: int) -> Set[int]:
        with self._lock:
            self._require(film_id)
            return set(self._likes[film_id])

    def like_counts(self) -> Dict[int, int]:
        with self._lock:
            return {film_id: len(likers) for film_id, likers in self._likes.items()}

    def _require(self, film_id: int) -> FilmRead:
        record = self._films.get(film_id)
        if record is None:
            raise NotFoundError(f"Фильм с id {film_id} не найден.")
        return record

    @staticmethod
    def _build(film_id: int, film: FilmBase, genres: List[GenreRead], mpa: MpaRead) -> FilmRead:
        return FilmRead(
            id=film_id,
            name=film.name,
            description=film.description,
            release_date=film.release_date,
            duration=film.duration,
            genres=[genre.model_copy() for genre in genres],
            mpa=mpa.model_copy(),
        )


class InMemoryGenreStorage(GenreStorage):
    """Genre reference table seeded with ``DEFAULT_GENRES``; read-only like the ratings."""

    def __init__(self) -> None:
        self._genres: Dict[int, GenreRead] = {
            genre_id: GenreRead(id=genre_id, name=name)
            for genre_id, name in enumerate(DEFAULT_GENRES, start=1)
        }

    def list_genres(self) -> List[GenreRead]:
        return [self._genres[key].model_copy() for key in sorted(self._genres)]

    def get_genre(self, genre_id: int) -> GenreRead:
        genre = self._genres.get(genre_id)
        if genre is None:
            raise NotFoundError(f"Жанр с id {genre_id} не найден.")
        return genre.model_copy()


class InMemoryMpaStorage(MpaStorage):
    """MPA ratings are fixed, so this storage is read-only."""

    def __init__(self) -> None:
        self._ratings: Dict[int, MpaRead] = {
            int(rating): MpaRead(id=int(rating), name=rating.title) for rating in MpaRating
        }

    def list_mpa(self) -> List[MpaRead]:
        return [self._ratings[key].model_copy() for key in sorted(self._ratings)]

    def get_mpa(self, mpa_id: int) -> MpaRead:
        rating = self._ratings.get(mpa_id)
        if rating is None:
            raise NotFoundError(f"MPA рейтинг с id {mpa_id} не найден.")
        return rating.model_copy()


def build_memory_storages() -> Storages:
    return Storages(
        users=InMemoryUserStorage(),
        films=InMemoryFilmStorage(),
        genres=InMemoryGenreStorage(),
        mpa=InMemoryMpaStorage(),
    )
