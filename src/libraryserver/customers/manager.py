"""Customer registry."""

import logging
from typing import Optional

from sqlalchemy import func, select

from ..addresses.manager import AddressRegistry
from ..addresses.models import Address
from ..addresses.schemas import AddressCreate
from ..config import get_config
from ..db.schemas import UpsertOutcome, UpsertResult
from ..db.sqlite import Database, get_db
from ..exceptions import BadRequestError, ConflictError, NotFoundError
from .models import Customer
from .schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


def _same_address(stored: Address, incoming: AddressCreate) -> bool:
    """Check if an incoming address describes the stored row, id included."""
    return (
        stored.id == incoming.id
        and stored.street == incoming.street
        and stored.city == incoming.city
        and stored.postal_code == incoming.postal_code
    )


class CustomerRegistry:
    """Manages library customers and their address assignment."""

    def __init__(
        self,
        db: Optional[Database] = None,
        addresses: Optional[AddressRegistry] = None,
        guard_loan_references: Optional[bool] = None,
    ):
        """Initialize customer registry.

        Args:
            db: Database instance
            addresses: Registry used to resolve customer addresses
            guard_loan_references: Refuse deleting customers with loans.
                Defaults to the LIBRARYSERVER_GUARD_LOAN_REFERENCES setting.
        """
        self.db = db or get_db()
        self.addresses = addresses or AddressRegistry(self.db)
        if guard_loan_references is None:
            guard_loan_references = get_config().guard_loan_references
        self.guard_loan_references = guard_loan_references

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, customer_id: int) -> Customer:
        """Get a customer by ID.

        Args:
            customer_id: Customer ID

        Returns:
            Customer with its address loaded

        Raises:
            NotFoundError: No customer with this ID
        """
        customer = self._get_or_none(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    def find_by_last_name(self, last_name: str) -> list[Customer]:
        """Find customers by exact last name."""
        return self._find(select(Customer).where(Customer.last_name == last_name))

    def find_by_address_id(self, address_id: int) -> list[Customer]:
        """Find customers living at the given address."""
        return self._find(select(Customer).where(Customer.address_id == address_id))

    def find_by_street(self, street: str) -> list[Customer]:
        """Find customers whose address has exactly this street line."""
        stmt = (
            select(Customer)
            .join(Address, Customer.address_id == Address.id)
            .where(Address.street == street)
        )
        return self._find(stmt)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, data: CustomerCreate) -> Customer:
        """Create a new customer.

        The address is resolved by street and postal code, so customers
        sharing an address share one address row.

        Args:
            data: Customer creation data

        Returns:
            Created customer

        Raises:
            BadRequestError: A personal or address field is missing
        """
        address = data.address
        required = (
            data.first_name,
            data.last_name,
            data.birth_date,
            data.email,
            address.street if address is not None else None,
            address.city if address is not None else None,
            address.postal_code if address is not None else None,
        )
        if any(value is None for value in required):
            raise BadRequestError()

        resolved = self.addresses.resolve_or_create(address)

        with self.db.get_session() as session:
            customer = Customer(
                first_name=data.first_name,
                last_name=data.last_name,
                birth_date=data.birth_date.isoformat(),
                email=data.email,
                address_id=resolved.id,
            )
            session.add(customer)
            session.commit()
            session.refresh(customer)
            session.expunge(customer)

        logger.info("Created customer %s at address %s", customer.id, resolved.id)
        return customer

    def upsert(self, customer_id: int, patch: CustomerUpdate) -> UpsertResult[Customer]:
        """Patch a customer, or create one from the patch if the ID is unknown.

        On an existing customer only the address and the email change. A
        changed address is resolved like in ``create``; names and birth date
        stay as stored.

        Args:
            customer_id: Customer ID
            patch: Patch data, also the creation data on fallback

        Returns:
            Tagged result with the stored customer
        """
        existing = self._get_or_none(customer_id)
        if existing is None:
            logger.info("Customer %s not found, creating it from the patch", customer_id)
            return UpsertResult(UpsertOutcome.CREATED, self.create(patch))

        address_id = existing.address_id
        if patch.address is not None and not _same_address(existing.address, patch.address):
            address_id = self.addresses.resolve_or_create(patch.address).id

        with self.db.get_session() as session:
            customer = session.get(Customer, customer_id)
            if customer is None:
                raise NotFoundError(f"Customer {customer_id} not found")

            customer.address_id = address_id
            if patch.email is not None:
                customer.email = patch.email

            session.commit()
            session.refresh(customer)
            session.expunge(customer)

        logger.info("Updated customer %s", customer_id)
        return UpsertResult(UpsertOutcome.UPDATED, customer)

    def update(self, customer_id: int, patch: CustomerUpdate) -> Customer:
        """Patch a customer, creating it when absent. See ``upsert``."""
        return self.upsert(customer_id, patch).record

    def delete(self, customer_id: int) -> None:
        """Delete a customer.

        Unconditional unless the loan reference guard is enabled.

        Args:
            customer_id: Customer ID

        Raises:
            ConflictError: Guard enabled and the customer still has loans
        """
        from ..loans.models import Loan

        with self.db.get_session() as session:
            if self.guard_loan_references:
                loans = session.execute(
                    select(func.count()).select_from(Loan).where(Loan.customer_id == customer_id)
                ).scalar() or 0
                if loans:
                    logger.warning("Refused to delete customer %s with %d loan(s)", customer_id, loans)
                    raise ConflictError(f"Customer {customer_id} still has {loans} loan(s)")

            customer = session.get(Customer, customer_id)
            if customer is not None:
                session.delete(customer)
                session.commit()
                logger.info("Deleted customer %s", customer_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_or_none(self, customer_id: int) -> Optional[Customer]:
        with self.db.get_session() as session:
            customer = session.get(Customer, customer_id)
            if customer:
                session.expunge(customer)
            return customer

    def _find(self, stmt) -> list[Customer]:
        with self.db.get_session() as session:
            customers = session.execute(stmt.order_by(Customer.id)).scalars().all()
            for c in customers:
                session.expunge(c)
            return list(customers)
