"""SQLAlchemy model for postal addresses."""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base


class Address(Base):
    """Address model - one row per distinct (street, postal code)."""

    __tablename__ = "addresses"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    street: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    city: Mapped[Optional[str]] = mapped_column(String(100))
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Address(id={self.id}, street='{self.street}', postal_code='{self.postal_code}')>"
