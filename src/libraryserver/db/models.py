"""SQLAlchemy ORM base for the local SQLite database.

Tables (declared in their feature packages):
- addresses: Postal addresses, shared between customers
- customers: Library customers
- media: Library items
- loans: Items currently checked out
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass
