"""Media catalog module."""

from .manager import ItemCatalog
from .models import Medium
from .schemas import MediumCreate, MediumResponse, MediumUpdate

__all__ = [
    "ItemCatalog",
    "Medium",
    "MediumCreate",
    "MediumUpdate",
    "MediumResponse",
]
