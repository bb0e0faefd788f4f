"""
Pydantic models for MPA content ratings.

The set of ratings is fixed: ``MpaRating`` enumerates them together
with their identifiers and display names.  Storage backends seed their
reference tables from this enumeration.
"""

from enum import IntEnum

from pydantic import BaseModel, Field


class MpaRating(IntEnum):
    G = 1
    PG = 2
    PG13 = 3
    R = 4
    NC17 = 5

    @property
    def title(self) -> str:
        return _MPA_TITLES[self]


_MPA_TITLES = {
    MpaRating.G: "G",
    MpaRating.PG: "PG",
    MpaRating.PG13: "PG-13",
    MpaRating.R: "R",
    MpaRating.NC17: "NC-17",
}


class MpaRef(BaseModel):
    """Reference to a rating inside a film payload; only ``id`` is needed."""

    id: int = Field(..., examples=[1])
    name: str | None = None


class MpaRead(BaseModel):
    id: int
    name: str

    model_config = {
        "from_attributes": True,
    }
