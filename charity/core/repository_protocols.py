"""Persistence contracts the services depend on.

Services only see these Protocols; the SQLAlchemy implementations live in
charity.repositories and are wired per request in charity.api.deps.
"""

from typing import Protocol

from charity.models import Case, Category, Donation, User


class UserDirectory(Protocol):
    """User lookup and creation. Username and email uniqueness is enforced by storage."""

    def find_by_username(self, username: str) -> User | None: ...
    def exists_by_username(self, username: str) -> bool: ...
    def exists_by_email(self, email: str) -> bool: ...
    def save(self, user: User) -> User: ...


class CasePersistence(Protocol):
    def find_by_id(self, case_id: int) -> Case | None: ...
    def save(self, case: Case) -> Case: ...
    def delete(self, case: Case) -> None: ...
    def find_all(self) -> list[Case]: ...
    def search(self, query: str) -> list[Case]: ...
    def find_by_owner(self, user_id: str) -> list[Case]: ...
    def find_by_category(self, category_id: int) -> list[Case]: ...


class DonationPersistence(Protocol):
    def save(self, donation: Donation) -> Donation:
        """Insert the donation and add its amount to the case's raised_amount, atomically."""
        ...

    def find_by_case(self, case_id: int) -> list[Donation]: ...
    def find_by_user(self, user_id: str) -> list[Donation]: ...
    def exists_for_case(self, case_id: int) -> bool: ...


class CategoryPersistence(Protocol):
    def find_all(self) -> list[Category]: ...
    def find_by_id(self, category_id: int) -> Category | None: ...
    def find_by_name(self, name: str) -> Category | None: ...
