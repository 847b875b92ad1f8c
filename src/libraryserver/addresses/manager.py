"""Address registry with dedup on write."""

import logging
from typing import Optional

from sqlalchemy import func, select

from ..db.sqlite import Database, get_db
from ..exceptions import BadRequestError, ConflictError, NotFoundError
from .models import Address
from .schemas import AddressCreate

logger = logging.getLogger(__name__)


class AddressRegistry:
    """Manages postal addresses shared by customers."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize address registry.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    def resolve_or_create(self, candidate: AddressCreate) -> Address:
        """Return the stored address matching the candidate, inserting it if new.

        Street and postal code form the match key. When several rows share
        the key the first one in storage order wins. A new row is stored with
        whatever city the candidate carries, possibly none.

        Args:
            candidate: Address to resolve

        Returns:
            Existing or newly stored address

        Raises:
            BadRequestError: Street or postal code is missing
        """
        if candidate.street is None or candidate.postal_code is None:
            raise BadRequestError()

        with self.db.get_session() as session:
            existing = session.execute(
                select(Address).where(
                    Address.street == candidate.street,
                    Address.postal_code == candidate.postal_code,
                ).order_by(Address.id)
            ).scalars().first()
            if existing:
                session.expunge(existing)
                return existing

            address = Address(
                street=candidate.street,
                city=candidate.city,
                postal_code=candidate.postal_code,
            )
            session.add(address)
            session.commit()
            session.refresh(address)
            session.expunge(address)

        logger.info("Created address %s (%s, %s)", address.id, address.street, address.postal_code)
        return address

    def get(self, address_id: int) -> Address:
        """Get an address by ID.

        Raises:
            NotFoundError: No address with this ID
        """
        with self.db.get_session() as session:
            address = session.get(Address, address_id)
            if address is None:
                raise NotFoundError(f"Address {address_id} not found")
            session.expunge(address)
            return address

    def find_by_postal_code(self, postal_code: str) -> list[Address]:
        """Find addresses with the given postal code."""
        return self._find(Address.postal_code == postal_code)

    def find_by_street_prefix(self, text: str) -> list[Address]:
        """Find addresses whose street starts with text.

        The comparison is case-sensitive, which rules out SQLite's LIKE.
        """
        return self._find(func.substr(Address.street, 1, len(text)) == text)

    def find_by_street_and_postal_code(self, street: str, postal_code: str) -> list[Address]:
        """Find addresses matching both street and postal code exactly."""
        return self._find(Address.street == street, Address.postal_code == postal_code)

    def list_all(self) -> list[Address]:
        """List all addresses."""
        return self._find()

    def delete(self, address_id: int) -> None:
        """Delete an address nobody lives at.

        Args:
            address_id: Address ID

        Raises:
            ConflictError: A customer still references the address
        """
        # Imported here, customers depend on this module
        from ..customers.models import Customer

        with self.db.get_session() as session:
            residents = session.execute(
                select(func.count()).select_from(Customer).where(Customer.address_id == address_id)
            ).scalar() or 0
            if residents:
                logger.warning(
                    "Refused to delete address %s, %d customer(s) reference it",
                    address_id,
                    residents,
                )
                raise ConflictError(f"Address {address_id} is referenced by {residents} customer(s)")

            address = session.get(Address, address_id)
            if address is not None:
                session.delete(address)
                session.commit()
                logger.info("Deleted address %s", address_id)

    def _find(self, *criteria) -> list[Address]:
        with self.db.get_session() as session:
            stmt = select(Address).order_by(Address.id)
            if criteria:
                stmt = stmt.where(*criteria)
            addresses = session.execute(stmt).scalars().all()
            for a in addresses:
                session.expunge(a)
            return list(addresses)
