"""Pydantic schemas for library media."""

from typing import Optional

from pydantic import BaseModel, Field


class MediumCreate(BaseModel):
    """Schema for creating a medium. Title and author are checked on create."""

    title: Optional[str] = Field(None, max_length=500)
    author: Optional[str] = Field(None, max_length=500)
    genre: Optional[str] = Field(None, max_length=100)
    age_rating: Optional[int] = None
    catalog_number: Optional[int] = None
    shelf_location: Optional[str] = Field(None, max_length=20)


class MediumUpdate(MediumCreate):
    """Schema for patching a medium.

    Title and author are ignored on an existing medium.
    """

    pass


class MediumResponse(BaseModel):
    """Schema for medium responses."""

    id: int
    title: str
    author: str
    genre: Optional[str]
    age_rating: Optional[int]
    catalog_number: Optional[int]
    shelf_location: Optional[str]

    model_config = {"from_attributes": True}
