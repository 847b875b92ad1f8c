"""Pydantic schemas for library customers."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from ..addresses.schemas import AddressCreate, AddressResponse


class CustomerCreate(BaseModel):
    """Schema for creating a customer.

    Fields are optional at the schema level. ``CustomerRegistry.create``
    answers with a bad request when any of them, or any address field, is
    missing.
    """

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    email: Optional[str] = Field(None, max_length=200)
    address: Optional[AddressCreate] = None


class CustomerUpdate(CustomerCreate):
    """Schema for patching a customer.

    Only ``address`` and ``email`` are applied to an existing customer. The
    remaining fields matter when the target does not exist and the patch is
    used to create it.
    """

    pass


class CustomerResponse(BaseModel):
    """Schema for customer responses."""

    id: int
    first_name: str
    last_name: str
    birth_date: date
    email: str
    address: AddressResponse

    model_config = {"from_attributes": True}
