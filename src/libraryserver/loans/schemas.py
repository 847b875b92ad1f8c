"""Pydantic schemas for loans."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..customers.schemas import CustomerResponse
from ..media.schemas import MediumResponse


class CustomerRef(BaseModel):
    """Reference to an existing customer. Other customer fields are ignored."""

    id: Optional[int] = None


class MediumRef(BaseModel):
    """Reference to an existing medium. Other medium fields are ignored."""

    id: Optional[int] = None


class LoanCreate(BaseModel):
    """Schema for creating a loan.

    Both references are optional here so that an incomplete request reaches
    the manager and is answered with a bad request.
    """

    customer: Optional[CustomerRef] = None
    medium: Optional[MediumRef] = None
    duration_days: Optional[int] = Field(None, ge=1)


class LoanUpdate(LoanCreate):
    """Schema for patching a loan.

    Only ``duration_days`` is applied to an existing loan.
    """

    pass


class LoanResponse(BaseModel):
    """Schema for loan responses."""

    id: int
    started_at: datetime
    duration_days: int
    due_at: datetime
    is_overdue: bool
    customer_id: int
    medium_id: int

    # Related data, None once the referenced record is gone
    customer: Optional[CustomerResponse] = None
    medium: Optional[MediumResponse] = None

    model_config = {"from_attributes": True}
