"""SQLAlchemy model for loans."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..config import DEFAULT_LOAN_DAYS
from ..customers.models import Customer
from ..db.models import Base
from ..media.models import Medium


def utc_now_iso() -> str:
    """Current UTC time as an ISO timestamp."""
    return datetime.now(timezone.utc).isoformat()


class Loan(Base):
    """Loan model - a medium checked out by a customer."""

    __tablename__ = "loans"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Set by the server when the loan is created
    started_at: Mapped[str] = mapped_column(String(32), nullable=False, default=utc_now_iso)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_LOAN_DAYS)

    customer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("customers.id"),
        nullable=False,
        index=True,
    )
    medium_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("media.id"),
        nullable=False,
        index=True,
    )

    # Relationships (None when the referenced row was deleted)
    customer: Mapped[Optional["Customer"]] = relationship("Customer", lazy="joined")
    medium: Mapped[Optional["Medium"]] = relationship("Medium", lazy="joined")

    def __repr__(self) -> str:
        return f"<Loan(id={self.id}, medium_id={self.medium_id}, customer_id={self.customer_id})>"

    @property
    def started(self) -> datetime:
        """Start of the loan as an aware datetime."""
        return datetime.fromisoformat(self.started_at)

    @property
    def due_at(self) -> datetime:
        """When the medium has to be back."""
        return self.started + timedelta(days=self.duration_days)

    @property
    def is_overdue(self) -> bool:
        """Check if loan is overdue."""
        return self.due_at < datetime.now(timezone.utc)

    @property
    def days_overdue(self) -> int:
        """Days overdue (0 if not overdue)."""
        if not self.is_overdue:
            return 0
        return (datetime.now(timezone.utc) - self.due_at).days
