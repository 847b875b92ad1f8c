"""Customer module.

Provides functionality for:
- Registering customers together with their postal address
- Moving customers to another (shared) address
- Looking customers up by name, address or street
"""

from .manager import CustomerRegistry
from .models import Customer
from .schemas import CustomerCreate, CustomerResponse, CustomerUpdate

__all__ = [
    "CustomerRegistry",
    "Customer",
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
]
