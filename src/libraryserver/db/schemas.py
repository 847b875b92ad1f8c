"""Shared schemas for write results."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class UpsertOutcome(str, Enum):
    """What an upsert did with the target id."""

    CREATED = "created"  # Target id was absent, a new record was created
    UPDATED = "updated"  # Target record existed and was patched


@dataclass
class UpsertResult(Generic[T]):
    """Tagged result of an upsert."""

    outcome: UpsertOutcome
    record: T

    @property
    def created(self) -> bool:
        """Check if the upsert fell back to creating a record."""
        return self.outcome == UpsertOutcome.CREATED
