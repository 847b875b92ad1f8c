"""SQLAlchemy model for library media."""

from typing import Optional

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..db.models import Base


class Medium(Base):
    """Medium model - a book, film or other item that can be lent."""

    __tablename__ = "media"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(500), nullable=False)
    genre: Mapped[Optional[str]] = mapped_column(String(100))
    age_rating: Mapped[Optional[int]] = mapped_column(Integer)
    catalog_number: Mapped[Optional[int]] = mapped_column(BigInteger)  # ISBN
    shelf_location: Mapped[Optional[str]] = mapped_column(String(20))  # Shelf code, e.g. "A1"

    def __repr__(self) -> str:
        return f"<Medium(id={self.id}, title='{self.title}')>"
