"""Postal address module.

Addresses are shared: several customers living together point at the same
row, and customer writes reuse an existing row instead of inserting a copy.
"""

from .manager import AddressRegistry
from .models import Address
from .schemas import AddressCreate, AddressResponse

__all__ = [
    "AddressRegistry",
    "Address",
    "AddressCreate",
    "AddressResponse",
]
