"""Loan module.

A medium is either available (no loan row) or on loan (exactly one row).
Returning a medium deletes its loan.
"""

from .manager import LoanManager
from .models import Loan
from .schemas import CustomerRef, LoanCreate, LoanResponse, LoanUpdate, MediumRef

__all__ = [
    "LoanManager",
    "Loan",
    "LoanCreate",
    "LoanUpdate",
    "LoanResponse",
    "CustomerRef",
    "MediumRef",
]
