import datetime as dt

import pytest

from filmorate_api.app.core.exceptions import ValidationError
from filmorate_api.app.services.validation import (
    MAX_DESCRIPTION_LENGTH,
    MIN_RELEASE_DATE,
    normalize_user,
    validate_film,
    validate_user,
)
from tests.factories import make_film, make_user


def test_valid_film_passes():
    validate_film(make_film("Matrix"))


def test_film_release_date_boundary():
    validate_film(make_film("First", release_date=MIN_RELEASE_DATE))
    with pytest.raises(ValidationError):
        validate_film(make_film("Too early", release_date=dt.date(1895, 12, 27)))


def test_film_description_length_boundary():
    validate_film(make_film("Long", description="x" * MAX_DESCRIPTION_LENGTH))
    with pytest.raises(ValidationError):
        validate_film(make_film("Longer", description="x" * (MAX_DESCRIPTION_LENGTH + 1)))


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"name": "   "},
        {"name": None},
        {"duration": 0},
        {"duration": -5},
        {"duration": None},
        {"release_date": None},
        {"mpa": None},
    ],
)
def test_invalid_film_rejected(overrides):
    with pytest.raises(ValidationError):
        validate_film(make_film("Film", **overrides))


def test_valid_user_passes():
    validate_user(make_user("dolore"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"email": None},
        {"email": ""},
        {"email": "mail.example.com"},
        {"email": "user @example.com"},
        {"login": None},
        {"login": "  "},
        {"login": "do lore"},
    ],
)
def test_invalid_user_rejected(overrides):
    with pytest.raises(ValidationError):
        validate_user(make_user("dolore", **overrides))


def test_birthday_checked_against_reference_date():
    today = dt.date(2024, 5, 1)
    validate_user(make_user("born_today", birthday=today), today=today)
    with pytest.raises(ValidationError):
        validate_user(make_user("unborn", birthday=dt.date(2024, 5, 2)), today=today)


def test_missing_birthday_is_allowed():
    validate_user(make_user("nobody", birthday=None))


@pytest.mark.parametrize("name", [None, "", "   "])
def test_blank_name_replaced_by_login(name):
    user = make_user("dolore", name=name)
    normalized = normalize_user(user)
    assert normalized.name == "dolore"
    # the original payload is left as it was
    assert user.name == name


def test_present_name_kept():
    assert normalize_user(make_user("dolore", name="Nick Name")).name == "Nick Name"
