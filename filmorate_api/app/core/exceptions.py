"""
Error kinds raised by services and storage.

Only ``main.py`` knows how these map onto HTTP status codes; the rest
of the application raises them and lets them propagate.
"""


class FilmorateError(Exception):
    """Base class for all application errors."""

    kind = "Внутренняя ошибка сервера"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FilmorateError):
    """Malformed input, detected before any mutation."""

    kind = "Ошибка валидации"


class NotFoundError(FilmorateError):
    """A referenced identifier does not resolve to a stored record."""

    kind = "Объект не найден"


class UnexpectedError(FilmorateError):
    """Any other failure (e.g. a database error)."""
