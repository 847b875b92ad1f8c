"""Loan manager for checkout and return operations."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..config import get_config
from ..customers.models import Customer
from ..db.schemas import UpsertOutcome, UpsertResult
from ..db.sqlite import Database, get_db
from ..exceptions import BadRequestError, ConflictError, NotFoundError
from ..media.models import Medium
from .models import Loan, utc_now_iso
from .schemas import LoanCreate, LoanUpdate

logger = logging.getLogger(__name__)


class LoanManager:
    """Manages loans.

    At most one loan may reference a medium. The check and the insert run
    as separate steps, so two concurrent checkouts of the same medium can
    both pass the check.
    """

    def __init__(self, db: Optional[Database] = None, loan_days: Optional[int] = None):
        """Initialize loan manager.

        Args:
            db: Database instance
            loan_days: Duration for loans created without one. Defaults to
                the LIBRARYSERVER_LOAN_DAYS setting.
        """
        self.db = db or get_db()
        self.loan_days = loan_days if loan_days is not None else get_config().loan_days

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, loan_id: int) -> Loan:
        """Get a loan by ID.

        Raises:
            NotFoundError: No loan with this ID
        """
        with self.db.get_session() as session:
            loan = session.get(Loan, loan_id)
            if loan is None:
                raise NotFoundError(f"Loan {loan_id} not found")
            session.expunge(loan)
            return loan

    def find_by_medium_id(self, medium_id: int) -> list[Loan]:
        """Get the loans of a medium, at most one while the invariant holds.

        Args:
            medium_id: Medium ID

        Returns:
            List of loans for the medium
        """
        with self.db.get_session() as session:
            loans = self._loans_for_medium(session, medium_id)
            for loan in loans:
                session.expunge(loan)
            return loans

    def find_by_customer_id(self, customer_id: int) -> list[Loan]:
        """Get the loans held by a customer."""
        return self._find(Loan.customer_id == customer_id)

    def list_all(self) -> list[Loan]:
        """List all loans."""
        return self._find()

    def list_overdue(self) -> list[Loan]:
        """List loans past their due date, most overdue first."""
        overdue = [loan for loan in self.list_all() if loan.is_overdue]
        return sorted(overdue, key=lambda loan: loan.due_at)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, data: LoanCreate) -> Loan:
        """Check a medium out to a customer.

        An existing loan on the medium wins over a missing customer or
        medium: the request is then a conflict, not a not-found.

        Args:
            data: Loan creation data

        Returns:
            Created loan with customer and medium attached

        Raises:
            BadRequestError: Customer or medium reference is incomplete
            ConflictError: The medium is already on loan
            NotFoundError: Customer or medium does not exist
        """
        if data.medium is None or data.medium.id is None:
            raise BadRequestError()
        if data.customer is None or data.customer.id is None:
            raise BadRequestError()

        medium_id = data.medium.id
        customer_id = data.customer.id

        with self.db.get_session() as session:
            medium = session.get(Medium, medium_id)
            customer = session.get(Customer, customer_id)
            existing = self._loans_for_medium(session, medium_id)

            if medium is not None and customer is not None and not existing:
                loan = Loan(
                    started_at=utc_now_iso(),
                    duration_days=(
                        data.duration_days if data.duration_days is not None else self.loan_days
                    ),
                    customer=customer,
                    medium=medium,
                )
                session.add(loan)
                session.commit()
                session.refresh(loan)
                session.expunge(loan)
                logger.info(
                    "Created loan %s: medium %s to customer %s for %d days",
                    loan.id,
                    medium_id,
                    customer_id,
                    loan.duration_days,
                )
                return loan

            if existing:
                logger.warning("Refused loan, medium %s is already on loan", medium_id)
                raise ConflictError(f"Medium {medium_id} is already on loan")

            logger.warning(
                "Refused loan, medium %s or customer %s does not exist", medium_id, customer_id
            )
            raise NotFoundError(f"Medium {medium_id} or customer {customer_id} not found")

    def upsert(self, loan_id: int, patch: LoanUpdate) -> UpsertResult[Loan]:
        """Patch a loan, or create one from the patch if the ID is unknown.

        Only the duration of an existing loan can change. On fallback the
        supplied ID is not reused.

        Args:
            loan_id: Loan ID
            patch: Patch data, also the creation data on fallback

        Returns:
            Tagged result with the stored loan
        """
        with self.db.get_session() as session:
            loan = session.get(Loan, loan_id)

            if loan is not None:
                if patch.duration_days is not None:
                    loan.duration_days = patch.duration_days
                session.commit()
                session.refresh(loan)
                session.expunge(loan)

        if loan is None:
            logger.info("Loan %s not found, creating a loan from the patch", loan_id)
            return UpsertResult(UpsertOutcome.CREATED, self.create(patch))

        logger.info("Updated loan %s", loan_id)
        return UpsertResult(UpsertOutcome.UPDATED, loan)

    def update(self, loan_id: int, patch: LoanUpdate) -> Loan:
        """Patch a loan, creating one when absent. See ``upsert``."""
        return self.upsert(loan_id, patch).record

    def delete_by_medium_id(self, medium_id: int) -> int:
        """Return a medium by deleting its loans.

        Args:
            medium_id: Medium ID

        Returns:
            Number of loans removed, 0 if the medium was available
        """
        with self.db.get_session() as session:
            result = session.execute(delete(Loan).where(Loan.medium_id == medium_id))
            session.commit()

        if result.rowcount:
            logger.info("Returned medium %s, removed %d loan(s)", medium_id, result.rowcount)
        return result.rowcount

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _loans_for_medium(self, session: Session, medium_id: int) -> list[Loan]:
        stmt = select(Loan).where(Loan.medium_id == medium_id).order_by(Loan.id)
        return list(session.execute(stmt).scalars().all())

    def _find(self, *criteria) -> list[Loan]:
        with self.db.get_session() as session:
            stmt = select(Loan).order_by(Loan.id)
            if criteria:
                stmt = stmt.where(*criteria)
            loans = session.execute(stmt).scalars().all()
            for loan in loans:
                session.expunge(loan)
            return list(loans)
