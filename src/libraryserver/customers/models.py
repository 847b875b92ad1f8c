"""SQLAlchemy model for library customers."""

from datetime import date

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..addresses.models import Address
from ..db.models import Base


class Customer(Base):
    """Customer model - a person allowed to borrow media."""

    __tablename__ = "customers"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    birth_date: Mapped[str] = mapped_column(String(10), nullable=False)  # ISO date
    email: Mapped[str] = mapped_column(String(200), nullable=False)

    # Shared with everyone else living there, never owned
    address_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("addresses.id"),
        nullable=False,
        index=True,
    )

    # Relationships
    address: Mapped["Address"] = relationship("Address", lazy="joined")

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.first_name} {self.last_name}')>"

    @property
    def birthday(self) -> date:
        """Birth date as a date object."""
        return date.fromisoformat(self.birth_date)
