"""
Validation rules for films and users.

These are pure functions: they inspect a payload and raise
``ValidationError`` with a human readable message on the first
violated rule.  They never modify the payload; ``normalize_user``
returns a copy instead.
"""

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from ..schemas.film import FilmBase
from ..schemas.user import UserBase


MAX_DESCRIPTION_LENGTH = 200
MIN_RELEASE_DATE = date(1895, 12, 28)


def validate_film(film: FilmBase) -> None:
    """Check the field constraints of a film payload."""
    if film.name is None or not film.name.strip():
        raise ValidationError("Название фильма не может быть пустым.")
    if film.description is not None and len(film.description) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Длина описания фильма не должна превышать {MAX_DESCRIPTION_LENGTH} символов."
        )
    if film.release_date is None:
        raise ValidationError("Дата релиза должна быть указана.")
    if film.release_date < MIN_RELEASE_DATE:
        raise ValidationError(
            f"Дата релиза не может быть раньше {MIN_RELEASE_DATE.strftime('%d.%m.%Y')}."
        )
    if film.duration is None or film.duration <= 0:
        raise ValidationError("Продолжительность фильма должна быть положительной.")
    if film.mpa is None:
        raise ValidationError("MPA рейтинг должен быть указан.")


def validate_user(user: UserBase, today: Optional[date] = None) -> None:
    """Check the field constraints of a user payload.

    ``today`` is the reference date for the birthday check and defaults
    to the current date.
    """
    email = user.email
    if email is None or not email.strip() or "@" not in email or _has_whitespace(email):
        raise ValidationError(
            "Электронная почта должна быть указана, не содержать пробелов и содержать символ '@'."
        )
    login = user.login
    if login is None or not login.strip() or _has_whitespace(login):
        raise ValidationError("Логин должен быть указан и не может содержать пробелы.")
    today = today or date.today()
    if user.birthday is not None and user.birthday > today:
        raise ValidationError("Дата рождения не может быть в будущем.")


def normalize_user(user: UserBase) -> UserBase:
    """Return a copy of ``user`` whose blank name is replaced by the login."""
    if user.name is None or not user.name.strip():
        return user.model_copy(update={"name": user.login})
    return user


def _has_whitespace(value: str) -> bool:
    return any(ch.isspace() for ch in value)
