"""
Pydantic models for film data.

``FilmBase`` contains the fields shared by requests; ``FilmCreate`` and
``FilmUpdate`` extend it for POST and PUT, and ``FilmRead`` is the
response shape with genre and rating names resolved.  The release date
travels as ``releaseDate`` on the wire.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .genre import GenreRead, GenreRef
from .mpa import MpaRead, MpaRef


class FilmBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, examples=["nisi eiusmod"])
    description: Optional[str] = Field(None, examples=["adipisicing"])
    release_date: Optional[date] = Field(None, alias="releaseDate", examples=["1967-03-25"])
    duration: Optional[int] = Field(None, examples=[100])
    genres: Optional[List[GenreRef]] = None
    mpa: Optional[MpaRef] = None


class FilmCreate(FilmBase):
    """Schema for creating a film."""
    pass


class FilmUpdate(FilmBase):
    """Schema for replacing a stored film; ``id`` selects the record."""

    id: Optional[int] = Field(None, examples=[1])


class FilmRead(BaseModel):
    """Schema for reading a film from the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    release_date: date = Field(..., alias="releaseDate")
    duration: int
    genres: List[GenreRead] = []
    mpa: MpaRead
