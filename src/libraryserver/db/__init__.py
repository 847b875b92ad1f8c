"""Database module for local SQLite storage."""

from .models import Base
from .schemas import UpsertOutcome, UpsertResult
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "UpsertOutcome",
    "UpsertResult",
    "Database",
    "get_db",
    "reset_db",
]
