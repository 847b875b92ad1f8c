"""Pydantic schemas for postal addresses."""

from typing import Optional

from pydantic import BaseModel, Field


class AddressCreate(BaseModel):
    """Schema for an incoming address.

    Every field is optional here; the managers decide which ones a given
    write needs and answer with a bad request otherwise.
    """

    id: Optional[int] = None
    street: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)


class AddressResponse(BaseModel):
    """Schema for address responses."""

    id: int
    street: str
    city: Optional[str]
    postal_code: str

    model_config = {"from_attributes": True}
