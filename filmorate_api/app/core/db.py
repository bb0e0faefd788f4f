"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a transactional cursor (``get_cursor``) and for
applying migrations and seeding reference data (``init_db``).  SQLite
is used as a lightweight embedded database; to switch to another DBMS
you would replace the connection logic and adapt SQL syntax.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings
from ..schemas.genre import DEFAULT_GENRES
from ..schemas.mpa import MpaRating


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS mpa_ratings (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS genres (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL,
            login TEXT NOT NULL,
            name TEXT NOT NULL,
            birthday DATE
        );

        CREATE TABLE IF NOT EXISTS films (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT,
            release_date DATE NOT NULL,
            duration INTEGER NOT NULL CHECK (duration > 0),
            mpa_id INTEGER NOT NULL,
            FOREIGN KEY(mpa_id) REFERENCES mpa_ratings(id)
        );

        CREATE TABLE IF NOT EXISTS film_genres (
            film_id INTEGER NOT NULL,
            genre_id INTEGER NOT NULL,
            PRIMARY KEY (film_id, genre_id),
            FOREIGN KEY(film_id) REFERENCES films(id),
            FOREIGN KEY(genre_id) REFERENCES genres(id)
        );

        CREATE TABLE IF NOT EXISTS likes (
            film_id INTEGER NOT NULL,
            user_id INTEGER NOT NULL,
            PRIMARY KEY (film_id, user_id),
            FOREIGN KEY(film_id) REFERENCES films(id),
            FOREIGN KEY(user_id) REFERENCES users(id)
        );

        -- One row per friendship, stored with the smaller id first.
        CREATE TABLE IF NOT EXISTS friendships (
            user_id INTEGER NOT NULL,
            friend_id INTEGER NOT NULL,
            PRIMARY KEY (user_id, friend_id),
            CHECK (user_id < friend_id),
            FOREIGN KEY(user_id) REFERENCES users(id),
            FOREIGN KEY(friend_id) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: indices for the reverse lookups used by the friend
    # graph and the popularity ranking
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_friendships_friend_id ON friendships(friend_id);
        CREATE INDEX IF NOT EXISTS idx_likes_user_id ON likes(user_id);
        CREATE INDEX IF NOT EXISTS idx_film_genres_genre_id ON film_genres(genre_id);
        """,
    ),
]


def get_database_path(db_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute (or the special ``:memory:``),
    use it directly.  Otherwise resolve it relative to the package
    root.
    """
    db_url = db_url or settings.database_url
    if os.path.isabs(db_url) or db_url == ":memory:":
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # filmorate_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection returns rows as ``sqlite3.Row`` objects so columns
    can be accessed by name.  Dates are stored and returned as ISO
    strings; conversion happens in the storage layer.
    """
    conn = sqlite3.connect(db_path or get_database_path())
    conn.row_factory = sqlite3.Row
    # Foreign keys are off by default in SQLite and must be enabled
    # per connection.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor inside one transaction.

    The transaction is committed when the block exits normally and
    rolled back when it raises.  The connection is always closed.
    """
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  Afterwards the MPA ratings and genres reference
    tables are seeded if they are empty.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version

        seed_reference_data(cursor)


def seed_reference_data(cursor: sqlite3.Cursor) -> None:
    """Fill the ``mpa_ratings`` and ``genres`` tables when they are empty."""
    for rating in MpaRating:
        cursor.execute(
            "INSERT OR IGNORE INTO mpa_ratings (id, name) VALUES (?, ?)",
            (int(rating), rating.title),
        )

    row = cursor.execute("SELECT COUNT(*) AS count FROM genres").fetchone()
    if row["count"] == 0:
        logger.info("Таблица genres пуста, добавляем стандартные жанры.")
        cursor.executemany(
            "INSERT INTO genres (name) VALUES (?)",
            [(name,) for name in DEFAULT_GENRES],
        )
    else:
        logger.debug("Жанры уже существуют, инициализация пропущена.")
