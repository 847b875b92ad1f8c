"""Pytest configuration and shared fixtures.

This module provides fixtures for testing libraryserver, including an
in-memory database, the record managers and sample records.
"""

from datetime import date
from typing import Generator

import pytest

from libraryserver.addresses.manager import AddressRegistry
from libraryserver.addresses.schemas import AddressCreate
from libraryserver.config import reset_config
from libraryserver.customers.manager import CustomerRegistry
from libraryserver.customers.models import Customer
from libraryserver.customers.schemas import CustomerCreate
from libraryserver.db.sqlite import Database, reset_db
from libraryserver.loans.manager import LoanManager
from libraryserver.media.manager import ItemCatalog
from libraryserver.media.models import Medium
from libraryserver.media.schemas import MediumCreate


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch) -> Generator[None, None, None]:
    """Keep global config and database out of the tests' way."""
    for var in (
        "LIBRARYSERVER_DB_PATH",
        "LIBRARYSERVER_LOAN_DAYS",
        "LIBRARYSERVER_GUARD_LOAN_REFERENCES",
        "LIBRARYSERVER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    reset_db()
    yield
    reset_config()
    reset_db()


@pytest.fixture
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


# ============================================================================
# Manager Fixtures
# ============================================================================


@pytest.fixture
def addresses(db: Database) -> AddressRegistry:
    """Create an AddressRegistry with test database."""
    return AddressRegistry(db)


@pytest.fixture
def customers(db: Database, addresses: AddressRegistry) -> CustomerRegistry:
    """Create a CustomerRegistry with test database."""
    return CustomerRegistry(db, addresses=addresses, guard_loan_references=False)


@pytest.fixture
def catalog(db: Database) -> ItemCatalog:
    """Create an ItemCatalog with test database."""
    return ItemCatalog(db, guard_loan_references=False)


@pytest.fixture
def loans(db: Database) -> LoanManager:
    """Create a LoanManager with test database."""
    return LoanManager(db, loan_days=14)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_address_data() -> AddressCreate:
    """Create sample address data."""
    return AddressCreate(street="Zürcherstrasse 1", city="Zürich", postal_code="8008")


@pytest.fixture
def sample_customer_data(sample_address_data: AddressCreate) -> CustomerCreate:
    """Create sample customer data."""
    return CustomerCreate(
        first_name="Hans",
        last_name="Meier",
        birth_date=date(1985, 4, 12),
        email="hans.meier@example.com",
        address=sample_address_data,
    )


@pytest.fixture
def sample_medium_data() -> MediumCreate:
    """Create sample medium data."""
    return MediumCreate(
        title="Lord of the Rings",
        author="J.R.R. Tolkien",
        genre="Fantasy",
        age_rating=13,
        catalog_number=9803478347812,
        shelf_location="A1",
    )


@pytest.fixture
def sample_customer(customers: CustomerRegistry, sample_customer_data: CustomerCreate) -> Customer:
    """Create and return a customer in the database."""
    return customers.create(sample_customer_data)


@pytest.fixture
def sample_medium(catalog: ItemCatalog, sample_medium_data: MediumCreate) -> Medium:
    """Create and return a medium in the database."""
    return catalog.create(sample_medium_data)
