"""
Abstract storage contracts.

Services depend only on these interfaces; ``memory`` and ``sqlite``
provide the two interchangeable implementations.  Lookups of a single
record raise ``NotFoundError`` when the identifier does not resolve.
Collections are returned ordered by identifier.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set

from ..schemas.film import FilmBase, FilmRead
from ..schemas.genre import GenreRead
from ..schemas.mpa import MpaRead
from ..schemas.user import UserBase, UserRead


class UserStorage(ABC):
    @abstractmethod
    def add_user(self, user: UserBase) -> UserRead:
        """Persist a new user and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update_user(self, user_id: int, user: UserBase) -> UserRead:
        raise NotImplementedError

    @abstractmethod
    def list_users(self) -> List[UserRead]:
        raise NotImplementedError

    @abstractmethod
    def get_user(self, user_id: int) -> UserRead:
        raise NotImplementedError

    @abstractmethod
    def get_users(self, user_ids: Iterable[int]) -> List[UserRead]:
        """Return the users among ``user_ids`` that exist."""
        raise NotImplementedError

    @abstractmethod
    def add_friend(self, user_id: int, friend_id: int) -> None:
        """Record an undirected friendship; a repeated call is a no-op."""
        raise NotImplementedError

    @abstractmethod
    def remove_friend(self, user_id: int, friend_id: int) -> None:
        """Drop the friendship if present; absence is not an error."""
        raise NotImplementedError

    @abstractmethod
    def get_friend_ids(self, user_id: int) -> Set[int]:
        raise NotImplementedError


class FilmStorage(ABC):
    @abstractmethod
    def add_film(self, film: FilmBase, genres: List[GenreRead], mpa: MpaRead) -> FilmRead:
        """Persist a new film with already resolved genres and rating."""
        raise NotImplementedError

    @abstractmethod
    def update_film(
        self, film_id: int, film: FilmBase, genres: List[GenreRead], mpa: MpaRead
    ) -> FilmRead:
        raise NotImplementedError

    @abstractmethod
    def list_films(self) -> List[FilmRead]:
        raise NotImplementedError

    @abstractmethod
    def get_film(self, film_id: int) -> FilmRead:
        raise NotImplementedError

    @abstractmethod
    def add_like(self, film_id: int, user_id: int) -> None:
        """Add ``user_id`` to the film's liker set; a repeated call is a no-op."""
        raise NotImplementedError

    @abstractmethod
    def remove_like(self, film_id: int, user_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_likes(self, film_id: int) -> Set[int]:
        raise NotImplementedError

    @abstractmethod
    def like_counts(self) -> Dict[int, int]:
        """Map film id to liker-set size; films without likes may be absent."""
        raise NotImplementedError


class GenreStorage(ABC):
    @abstractmethod
    def list_genres(self) -> List[GenreRead]:
        raise NotImplementedError

    @abstractmethod
    def get_genre(self, genre_id: int) -> GenreRead:
        raise NotImplementedError


class MpaStorage(ABC):
    @abstractmethod
    def list_mpa(self) -> List[MpaRead]:
        raise NotImplementedError

    @abstractmethod
    def get_mpa(self, mpa_id: int) -> MpaRead:
        raise NotImplementedError


@dataclass
class Storages:
    """The four storages an application instance works with."""

    users: UserStorage
    films: FilmStorage
    genres: GenreStorage
    mpa: MpaStorage
