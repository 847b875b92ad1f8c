"""Item catalog for library media."""

import logging
from typing import Optional

from sqlalchemy import func, select

from ..config import get_config
from ..db.schemas import UpsertOutcome, UpsertResult
from ..db.sqlite import Database, get_db
from ..exceptions import BadRequestError, ConflictError, NotFoundError
from .models import Medium
from .schemas import MediumCreate, MediumUpdate

logger = logging.getLogger(__name__)

# Fields a patch may change on an existing medium
PATCHABLE_FIELDS = ("genre", "age_rating", "catalog_number", "shelf_location")


class ItemCatalog:
    """Manages library media."""

    def __init__(
        self,
        db: Optional[Database] = None,
        guard_loan_references: Optional[bool] = None,
    ):
        """Initialize item catalog.

        Args:
            db: Database instance
            guard_loan_references: Refuse deleting media that are on loan.
                Defaults to the LIBRARYSERVER_GUARD_LOAN_REFERENCES setting.
        """
        self.db = db or get_db()
        if guard_loan_references is None:
            guard_loan_references = get_config().guard_loan_references
        self.guard_loan_references = guard_loan_references

    def get(self, medium_id: int) -> Medium:
        """Get a medium by ID.

        Raises:
            NotFoundError: No medium with this ID
        """
        medium = self._get_or_none(medium_id)
        if medium is None:
            raise NotFoundError(f"Medium {medium_id} not found")
        return medium

    def find_by_title(self, title: str) -> list[Medium]:
        """Find media by exact title."""
        return self._find(Medium.title == title)

    def list_all(self) -> list[Medium]:
        """List all media."""
        return self._find()

    def create(self, data: MediumCreate) -> Medium:
        """Create a new medium.

        Args:
            data: Medium creation data

        Returns:
            Created medium

        Raises:
            BadRequestError: Title or author is missing
        """
        if data.title is None or data.author is None:
            raise BadRequestError()

        with self.db.get_session() as session:
            medium = Medium(**data.model_dump())
            session.add(medium)
            session.commit()
            session.refresh(medium)
            session.expunge(medium)

        logger.info("Created medium %s '%s'", medium.id, medium.title)
        return medium

    def upsert(self, medium_id: int, patch: MediumUpdate) -> UpsertResult[Medium]:
        """Patch a medium, or create one from the patch if the ID is unknown.

        Args:
            medium_id: Medium ID
            patch: Patch data, also the creation data on fallback

        Returns:
            Tagged result with the stored medium
        """
        with self.db.get_session() as session:
            medium = session.get(Medium, medium_id)

            if medium is not None:
                for field in PATCHABLE_FIELDS:
                    value = getattr(patch, field)
                    if value is not None:
                        setattr(medium, field, value)

                session.commit()
                session.refresh(medium)
                session.expunge(medium)

        if medium is None:
            logger.info("Medium %s not found, creating it from the patch", medium_id)
            return UpsertResult(UpsertOutcome.CREATED, self.create(patch))

        logger.info("Updated medium %s", medium_id)
        return UpsertResult(UpsertOutcome.UPDATED, medium)

    def update(self, medium_id: int, patch: MediumUpdate) -> Medium:
        """Patch a medium, creating it when absent. See ``upsert``."""
        return self.upsert(medium_id, patch).record

    def delete(self, medium_id: int) -> None:
        """Delete a medium.

        Unconditional unless the loan reference guard is enabled.

        Raises:
            ConflictError: Guard enabled and the medium is on loan
        """
        from ..loans.models import Loan

        with self.db.get_session() as session:
            if self.guard_loan_references:
                loans = session.execute(
                    select(func.count()).select_from(Loan).where(Loan.medium_id == medium_id)
                ).scalar() or 0
                if loans:
                    logger.warning("Refused to delete medium %s, it is on loan", medium_id)
                    raise ConflictError(f"Medium {medium_id} is on loan")

            medium = session.get(Medium, medium_id)
            if medium is not None:
                session.delete(medium)
                session.commit()
                logger.info("Deleted medium %s", medium_id)

    def _get_or_none(self, medium_id: int) -> Optional[Medium]:
        with self.db.get_session() as session:
            medium = session.get(Medium, medium_id)
            if medium:
                session.expunge(medium)
            return medium

    def _find(self, *criteria) -> list[Medium]:
        with self.db.get_session() as session:
            stmt = select(Medium).order_by(Medium.id)
            if criteria:
                stmt = stmt.where(*criteria)
            media = session.execute(stmt).scalars().all()
            for m in media:
                session.expunge(m)
            return list(media)
