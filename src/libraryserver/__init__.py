"""Library record service.

Tracks customers, their postal addresses, library media and the loans
linking a customer to a medium.

Usage:
    from libraryserver import LibraryService

    service = LibraryService()
    loan = service.loans.create(LoanCreate(customer={"id": 7}, medium={"id": 42}))
"""

from .service import LibraryService

__all__ = ["LibraryService"]
__version__ = "1.0.0"
