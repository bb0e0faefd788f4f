"""
Pydantic models for user data.

Field constraints (email format, login without spaces, birthday in the
past) are deliberately not expressed here: they are checked by
``services.validation`` so that every violation surfaces as a
``ValidationError`` with a readable message.  The schemas only fix
the shape and types of the payload.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    email: Optional[str] = Field(None, examples=["user@example.com"])
    login: Optional[str] = Field(None, examples=["dolore"])
    name: Optional[str] = Field(None, examples=["Nick Name"])
    birthday: Optional[date] = Field(None, examples=["1946-08-20"])


class UserCreate(UserBase):
    """Schema for registering a user.  ``name`` falls back to ``login``."""
    pass


class UserUpdate(UserBase):
    """Schema for replacing a stored user; ``id`` selects the record."""

    id: Optional[int] = Field(None, examples=[1])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    email: str
    login: str
    name: str
    birthday: Optional[date] = None

    model_config = {
        "from_attributes": True,
    }
