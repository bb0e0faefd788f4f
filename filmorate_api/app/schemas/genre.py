"""
Pydantic models for film genres.

Genres form a small reference table.  ``DEFAULT_GENRES`` lists the
names seeded into an empty storage, in identifier order.
"""

from pydantic import BaseModel, Field


DEFAULT_GENRES = (
    "Комедия",
    "Драма",
    "Мультфильм",
    "Триллер",
    "Документальный",
    "Боевик",
)


class GenreRef(BaseModel):
    """Reference to a genre inside a film payload; only ``id`` is needed."""

    id: int = Field(..., examples=[1])
    name: str | None = None


class GenreRead(BaseModel):
    id: int
    name: str

    model_config = {
        "from_attributes": True,
    }
