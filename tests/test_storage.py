import pytest

from filmorate_api.app.core.exceptions import NotFoundError
from filmorate_api.app.schemas.genre import DEFAULT_GENRES, GenreRead
from filmorate_api.app.schemas.mpa import MpaRead
from tests.factories import make_film, make_user


G = MpaRead(id=1, name="G")
COMEDY = GenreRead(id=1, name="Комедия")
DRAMA = GenreRead(id=2, name="Драма")


def test_users_get_sequential_ids(storages):
    first = storages.users.add_user(make_user("alice"))
    second = storages.users.add_user(make_user("bob"))
    assert (first.id, second.id) == (1, 2)
    assert [user.login for user in storages.users.list_users()] == ["alice", "bob"]


def test_update_user_replaces_record(storages):
    user = storages.users.add_user(make_user("alice"))
    updated = storages.users.update_user(user.id, make_user("alice2", name="Alice"))
    assert updated.id == user.id
    assert storages.users.get_user(user.id).login == "alice2"


def test_missing_user_raises_not_found(storages):
    with pytest.raises(NotFoundError):
        storages.users.get_user(42)
    with pytest.raises(NotFoundError):
        storages.users.update_user(42, make_user("ghost"))


def test_get_users_skips_unknown_ids_and_orders_by_id(storages):
    for login in ("a", "b", "c"):
        storages.users.add_user(make_user(login))
    assert [user.id for user in storages.users.get_users([3, 1, 99])] == [1, 3]
    assert storages.users.get_users([]) == []


def test_friendship_is_symmetric_and_idempotent(storages):
    a = storages.users.add_user(make_user("a"))
    b = storages.users.add_user(make_user("b"))
    storages.users.add_friend(b.id, a.id)
    storages.users.add_friend(a.id, b.id)
    assert storages.users.get_friend_ids(a.id) == {b.id}
    assert storages.users.get_friend_ids(b.id) == {a.id}

    storages.users.remove_friend(a.id, b.id)
    storages.users.remove_friend(a.id, b.id)
    assert storages.users.get_friend_ids(a.id) == set()
    assert storages.users.get_friend_ids(b.id) == set()


def test_film_roundtrip_keeps_genres_and_rating(storages):
    film = storages.films.add_film(make_film("Matrix"), [COMEDY, DRAMA], G)
    stored = storages.films.get_film(film.id)
    assert stored == film
    assert [genre.id for genre in stored.genres] == [1, 2]
    assert stored.mpa == G


def test_update_film_replaces_genres(storages):
    film = storages.films.add_film(make_film("Matrix"), [COMEDY, DRAMA], G)
    pg = MpaRead(id=2, name="PG")
    updated = storages.films.update_film(film.id, make_film("Matrix Reloaded"), [DRAMA], pg)
    assert updated.name == "Matrix Reloaded"
    assert updated.genres == [DRAMA]
    assert storages.films.get_film(film.id).mpa == pg


def test_missing_film_raises_not_found(storages):
    with pytest.raises(NotFoundError):
        storages.films.get_film(7)
    with pytest.raises(NotFoundError):
        storages.films.update_film(7, make_film("Ghost"), [], G)
    with pytest.raises(NotFoundError):
        storages.films.get_likes(7)


def test_likes_are_a_set(storages):
    film = storages.films.add_film(make_film("Matrix"), [], G)
    user = storages.users.add_user(make_user("alice"))
    storages.films.add_like(film.id, user.id)
    storages.films.add_like(film.id, user.id)
    assert storages.films.get_likes(film.id) == {user.id}
    assert storages.films.like_counts().get(film.id) == 1

    storages.films.remove_like(film.id, user.id)
    storages.films.remove_like(film.id, user.id)
    assert storages.films.get_likes(film.id) == set()
    assert storages.films.like_counts().get(film.id, 0) == 0


def test_genres_seeded_in_order(storages):
    genres = storages.genres.list_genres()
    assert [genre.name for genre in genres] == list(DEFAULT_GENRES)
    assert [genre.id for genre in genres] == list(range(1, len(DEFAULT_GENRES) + 1))
    with pytest.raises(NotFoundError):
        storages.genres.get_genre(999)


def test_out_of_range_ids_are_not_found(storages):
    huge = 2**70
    with pytest.raises(NotFoundError):
        storages.users.get_user(huge)
    with pytest.raises(NotFoundError):
        storages.users.update_user(huge, make_user("ghost"))
    with pytest.raises(NotFoundError):
        storages.films.get_film(huge)
    with pytest.raises(NotFoundError):
        storages.films.add_like(huge, 1)
    with pytest.raises(NotFoundError):
        storages.genres.get_genre(huge)
    with pytest.raises(NotFoundError):
        storages.mpa.get_mpa(huge)


def test_mpa_ratings(storages):
    assert [(r.id, r.name) for r in storages.mpa.list_mpa()] == [
        (1, "G"),
        (2, "PG"),
        (3, "PG-13"),
        (4, "R"),
        (5, "NC-17"),
    ]
    assert storages.mpa.get_mpa(3).name == "PG-13"
    with pytest.raises(NotFoundError):
        storages.mpa.get_mpa(6)


def test_memory_storage_returns_copies():
    from filmorate_api.app.storage.memory import build_memory_storages

    storages = build_memory_storages()
    user = storages.users.add_user(make_user("alice"))
    user.login = "mallory"
    assert storages.users.get_user(user.id).login == "alice"
