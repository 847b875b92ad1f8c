"""Library service facade.

Wires the four record managers onto one database. This is the object the
request/response boundary (the CLI) works with.
"""

from typing import Optional

from .addresses.manager import AddressRegistry
from .config import Config, get_config
from .customers.manager import CustomerRegistry
from .db.sqlite import Database, get_db
from .loans.manager import LoanManager
from .media.manager import ItemCatalog


class LibraryService:
    """Entry point bundling addresses, customers, media and loans."""

    def __init__(self, db: Optional[Database] = None, config: Optional[Config] = None):
        """Initialize the service.

        Args:
            db: Database instance, the global one if omitted
            config: Configuration, loaded from the environment if omitted
        """
        self.config = config or get_config()
        self.db = db or get_db()

        self.addresses = AddressRegistry(self.db)
        self.customers = CustomerRegistry(
            self.db,
            addresses=self.addresses,
            guard_loan_references=self.config.guard_loan_references,
        )
        self.media = ItemCatalog(
            self.db,
            guard_loan_references=self.config.guard_loan_references,
        )
        self.loans = LoanManager(self.db, loan_days=self.config.loan_days)
