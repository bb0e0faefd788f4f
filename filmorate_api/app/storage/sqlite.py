"""
SQLite‑backed storage.

Every method opens its own connection and runs in a single
transaction (see ``core.db.get_cursor``), so existence checks and the
mutation that depends on them commit or roll back together.  Driver
errors are re‑raised as ``UnexpectedError``.

Friendships are stored once per pair with the smaller id in
``user_id``; reads query both columns.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from typing import Dict, Iterable, Iterator, List, Set

from ..core.db import get_cursor
from ..core.exceptions import NotFoundError, UnexpectedError
from ..schemas.film import FilmBase, FilmRead
from ..schemas.genre import GenreRead
from ..schemas.mpa import MpaRead
from ..schemas.user import UserBase, UserRead
from .base import FilmStorage, GenreStorage, MpaStorage, Storages, UserStorage


logger = logging.getLogger(__name__)


FILM_COLUMNS = (
    "f.id, f.name, f.description, f.release_date, f.duration, "
    "f.mpa_id, m.name AS mpa_name"
)


class SqliteStorage:
    """Common plumbing for the SQLite storages."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        try:
            with get_cursor(self.db_path) as cursor:
                yield cursor
        except OverflowError as e:
            # ids beyond the INTEGER range cannot name a stored row
            logger.warning("Identifier out of range: %s", e)
            raise NotFoundError(f"Объект с таким id не найден: {e}") from e
        except sqlite3.Error as e:
            logger.error("Database error: %s", e)
            raise UnexpectedError(f"Database error: {e}") from e


def _to_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def _row_to_user(row: sqlite3.Row) -> UserRead:
    return UserRead(
        id=row["id"],
        email=row["email"],
        login=row["login"],
        name=row["name"],
        birthday=_to_date(row["birthday"]),
    )


class SqliteUserStorage(SqliteStorage, UserStorage):
    def add_user(self, user: UserBase) -> UserRead:
        with self._cursor() as cursor:
            cursor.execute(
                "INSERT INTO users (email, login, name, birthday) VALUES (?, ?, ?, ?)",
                (user.email, user.login, user.name, _iso(user.birthday)),
            )
            user_id = cursor.lastrowid
            return self._fetch(cursor, user_id)

    def update_user(self, user_id: int, user: UserBase) -> UserRead:
        with self._cursor() as cursor:
            cursor.execute(
                "UPDATE users SET email = ?, login = ?, name = ?, birthday = ? WHERE id = ?",
                (user.email, user.login, user.name, _iso(user.birthday), user_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Пользователь с id {user_id} не найден.")
            return self._fetch(cursor, user_id)

    def list_users(self) -> List[UserRead]:
        with self._cursor() as cursor:
            rows = cursor.execute(
                "SELECT id, email, login, name, birthday FROM users ORDER BY id"
            ).fetchall()
            return [_row_to_user(row) for row in rows]

    def get_user(self, user_id: int) -> UserRead:
        with self._cursor() as cursor:
            return self._fetch(cursor, user_id)

    def get_users(self, user_ids: Iterable[int]) -> List[UserRead]:
        ids = sorted(set(user_ids))
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        with self._cursor() as cursor:
            rows = cursor.execute(
                f"SELECT id, email, login, name, birthday FROM users "
                f"WHERE id IN ({placeholders}) ORDER BY id",
                tuple(ids),
            ).fetchall()
            return [_row_to_user(row) for row in rows]

    def add_friend(self, user_id: int, friend_id: int) -> None:
        low, high = sorted((user_id, friend_id))
        with self._cursor() as cursor:
            cursor.execute(
                "INSERT OR IGNORE INTO friendships (user_id, friend_id) VALUES (?, ?)",
                (low, high),
            )

    def remove_friend(self, user_id: int, friend_id: int) -> None:
        low, high = sorted((user_id, friend_id))
        with self._cursor() as cursor:
            cursor.execute(
                "DELETE FROM friendships WHERE user_id = ? AND friend_id = ?",
                (low, high),
            )

    def get_friend_ids(self, user_id: int) -> Set[int]:
        with self._cursor() as cursor:
            rows = cursor.execute(
                """
                SELECT friend_id AS id FROM friendships WHERE user_id = ?
                UNION
                SELECT user_id AS id FROM friendships WHERE friend_id = ?
                """,
                (user_id, user_id),
            ).fetchall()
            return {row["id"] for row in rows}

    @staticmethod
    def _fetch(cursor: sqlite3.Cursor, user_id: int) -> UserRead:
        row = cursor.execute(
            "SELECT id, email, login, name, birthday FROM users WHERE id = ?",
            (user_id,),
        ).fetchone()
        if not row:
            raise NotFoundError(f"Пользователь с id {user_id} не найден.")
        return _row_to_user(row)


class SqliteFilmStorage(SqliteStorage, FilmStorage):
    def add_film(self, film: FilmBase, genres: List[GenreRead], mpa: MpaRead) -> FilmRead:
        with self._cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO films (name, description, release_date, duration, mpa_id)
                VALUES (?, ?, ?, ?, ?)
                """,
                (film.name, film.description, _iso(film.release_date), film.duration, mpa.id),
            )
            film_id = cursor.lastrowid
            self._save_genres(cursor, film_id, genres)
            return self._fetch(cursor, film_id)

    def update_film(
        self, film_id: int, film: FilmBase, genres: List[GenreRead], mpa: MpaRead
    ) -> FilmRead:
        with self._cursor() as cursor:
            cursor.execute(
                """
                UPDATE films SET name = ?, description = ?, release_date = ?, duration = ?, mpa_id = ?
                WHERE id = ?
                """,
                (film.name, film.description, _iso(film.release_date), film.duration, mpa.id, film_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Фильм с id {film_id} не найден.")
            cursor.execute("DELETE FROM film_genres WHERE film_id = ?", (film_id,))
            self._save_genres(cursor, film_id, genres)
            return self._fetch(cursor, film_id)

    def list_films(self) -> List[FilmRead]:
        with self._cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {FILM_COLUMNS} FROM films f "
                f"JOIN mpa_ratings m ON f.mpa_id = m.id ORDER BY f.id"
            ).fetchall()
            genres = self._genres_by_film(cursor)
            return [self._row_to_film(row, genres.get(row["id"], [])) for row in rows]

    def get_film(self, film_id: int) -> FilmRead:
        with self._cursor() as cursor:
            return self._fetch(cursor, film_id)

    def add_like(self, film_id: int, user_id: int) -> None:
        with self._cursor() as cursor:
            self._require(cursor, film_id)
            cursor.execute(
                "INSERT OR IGNORE INTO likes (film_id, user_id) VALUES (?, ?)",
                (film_id, user_id),
            )

    def remove_like(self, film_id: int, user_id: int) -> None:
        with self._cursor() as cursor:
            self._require(cursor, film_id)
            cursor.execute(
                "DELETE FROM likes WHERE film_id = ? AND user_id = ?",
                (film_id, user_id),
            )

    def get_likes(self, film_id: int) -> Set[int]:
        with self._cursor() as cursor:
            self._require(cursor, film_id)
            rows = cursor.execute(
                "SELECT user_id FROM likes WHERE film_id = ?", (film_id,)
            ).fetchall()
            return {row["user_id"] for row in rows}

    def like_counts(self) -> Dict[int, int]:
        with self._cursor() as cursor:
            rows = cursor.execute(
                "SELECT film_id, COUNT(user_id) AS likes FROM likes GROUP BY film_id"
            ).fetchall()
            return {row["film_id"]: row["likes"] for row in rows}

    @staticmethod
    def _require(cursor: sqlite3.Cursor, film_id: int) -> None:
        row = cursor.execute("SELECT id FROM films WHERE id = ?", (film_id,)).fetchone()
        if not row:
            raise NotFoundError(f"Фильм с id {film_id} не найден.")

    @staticmethod
    def _save_genres(cursor: sqlite3.Cursor, film_id: int, genres: List[GenreRead]) -> None:
        cursor.executemany(
            "INSERT OR IGNORE INTO film_genres (film_id, genre_id) VALUES (?, ?)",
            [(film_id, genre.id) for genre in genres],
        )

    def _fetch(self, cursor: sqlite3.Cursor, film_id: int) -> FilmRead:
        row = cursor.execute(
            f"SELECT {FILM_COLUMNS} FROM films f "
            f"JOIN mpa_ratings m ON f.mpa_id = m.id WHERE f.id = ?",
            (film_id,),
        ).fetchone()
        if not row:
            raise NotFoundError(f"Фильм с id {film_id} не найден.")
        genres = self._genres_by_film(cursor, film_id)
        return self._row_to_film(row, genres.get(film_id, []))

    @staticmethod
    def _genres_by_film(cursor: sqlite3.Cursor, film_id: int | None = None) -> Dict[int, List[GenreRead]]:
        query = (
            "SELECT fg.film_id, g.id, g.name FROM film_genres fg "
            "JOIN genres g ON fg.genre_id = g.id"
        )
        params: tuple = ()
        if film_id is not None:
            query += " WHERE fg.film_id = ?"
            params = (film_id,)
        query += " ORDER BY fg.film_id, g.id"
        result: Dict[int, List[GenreRead]] = {}
        for row in cursor.execute(query, params).fetchall():
            result.setdefault(row["film_id"], []).append(
                GenreRead(id=row["id"], name=row["name"])
            )
        return result

    @staticmethod
    def _row_to_film(row: sqlite3.Row, genres: List[GenreRead]) -> FilmRead:
        return FilmRead(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            release_date=_to_date(row["release_date"]),
            duration=row["duration"],
            genres=genres,
            mpa=MpaRead(id=row["mpa_id"], name=row["mpa_name"]),
        )


class SqliteGenreStorage(SqliteStorage, GenreStorage):
    def list_genres(self) -> List[GenreRead]:
        with self._cursor() as cursor:
            rows = cursor.execute("SELECT id, name FROM genres ORDER BY id").fetchall()
            return [GenreRead(id=row["id"], name=row["name"]) for row in rows]

    def get_genre(self, genre_id: int) -> GenreRead:
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT id, name FROM genres WHERE id = ?", (genre_id,)
            ).fetchone()
            if not row:
                raise NotFoundError(f"Жанр с id {genre_id} не найден.")
            return GenreRead(id=row["id"], name=row["name"])


class SqliteMpaStorage(SqliteStorage, MpaStorage):
    def list_mpa(self) -> List[MpaRead]:
        with self._cursor() as cursor:
            rows = cursor.execute("SELECT id, name FROM mpa_ratings ORDER BY id").fetchall()
            return [MpaRead(id=row["id"], name=row["name"]) for row in rows]

    def get_mpa(self, mpa_id: int) -> MpaRead:
        with self._cursor() as cursor:
            row = cursor.execute(
                "SELECT id, name FROM mpa_ratings WHERE id = ?", (mpa_id,)
            ).fetchone()
            if not row:
                raise NotFoundError(f"MPA рейтинг с id {mpa_id} не найден.")
            return MpaRead(id=row["id"], name=row["name"])


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def build_sqlite_storages(db_path: str) -> Storages:
    return Storages(
        users=SqliteUserStorage(db_path),
        films=SqliteFilmStorage(db_path),
        genres=SqliteGenreStorage(db_path),
        mpa=SqliteMpaStorage(db_path),
    )
