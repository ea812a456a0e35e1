"""SQLAlchemy implementations of the persistence protocols."""

from charity.repositories.cases import SqlCaseRepository
from charity.repositories.categories import SqlCategoryRepository
from charity.repositories.donations import SqlDonationRepository
from charity.repositories.users import SqlUserDirectory

__all__ = [
    "SqlCaseRepository",
    "SqlCategoryRepository",
    "SqlDonationRepository",
    "SqlUserDirectory",
]
