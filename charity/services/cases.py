"""Fundraising cases: creation by a logged-in user, lookups, edits and removal."""

import logging

from charity.core.errors import (
    CaseNotFoundError,
    CategoryNotFoundError,
    DomainValidationError,
    NotAuthenticatedError,
    UserNotFoundError,
)
from charity.core.repository_protocols import (
    CasePersistence,
    CategoryPersistence,
    DonationPersistence,
    UserDirectory,
)
from charity.models import Case
from charity.schemas.auth import Principal
from charity.schemas.case import CaseCreate, CaseStatus, CaseUpdate

logger = logging.getLogger(__name__)


class CaseService:
    def __init__(
        self,
        cases: CasePersistence,
        users: UserDirectory,
        categories: CategoryPersistence,
        donations: DonationPersistence,
    ) -> None:
        self._cases = cases
        self._users = users
        self._categories = categories
        self._donations = donations

    def create_case(self, principal: Principal | None, data: CaseCreate) -> Case:
        """
        Open a case owned by the calling user, filed under data.category_name.
        New cases start APPROVED with nothing raised.
        """
        if principal is None:
            raise NotAuthenticatedError()
        owner = self._users.find_by_username(principal.username)
        if owner is None:
            raise UserNotFoundError(principal.username)
        category = self._categories.find_by_name(data.category_name)
        if category is None:
            raise CategoryNotFoundError(data.category_name)

        case = self._cases.save(
            Case(
                title=data.title,
                description=data.description,
                image_url=data.image_url,
                goal_amount=data.goal_amount,
                raised_amount=0,
                status=CaseStatus.APPROVED.value,
                user_id=owner.id,
                category_id=category.id,
            )
        )
        logger.info("Case created: id=%s owner=%s", case.id, owner.username)
        return case

    def get_case(self, case_id: int) -> Case:
        case = self._cases.find_by_id(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)
        return case

    def list_cases(self) -> list[Case]:
        return self._cases.find_all()

    def search_cases(self, query: str) -> list[Case]:
        """Cases whose title or description contains query (case-insensitive)."""
        query = query.strip()
        if not query:
            return self._cases.find_all()
        return self._cases.search(query)

    def cases_for_user(self, username: str) -> list[Case]:
        user = self._users.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        return self._cases.find_by_owner(user.id)

    def cases_by_category(self, category_id: int) -> list[Case]:
        if self._categories.find_by_id(category_id) is None:
            raise CategoryNotFoundError(category_id)
        return self._cases.find_by_category(category_id)

    def update_case(self, principal: Principal | None, case_id: int, data: CaseUpdate) -> Case:
        """Edit title, description, goal and (optionally) image. raised_amount is untouched."""
        if principal is None:
            raise NotAuthenticatedError()
        case = self.get_case(case_id)
        case.title = data.title
        case.description = data.description
        case.goal_amount = data.goal_amount
        if data.image_url is not None:
            case.image_url = data.image_url
        case = self._cases.save(case)
        logger.info("Case updated: id=%s by=%s", case_id, principal.username)
        return case

    def delete_case(self, principal: Principal | None, case_id: int) -> None:
        """Remove a case that has not received donations."""
        if principal is None:
            raise NotAuthenticatedError()
        case = self.get_case(case_id)
        if self._donations.exists_for_case(case_id):
            raise DomainValidationError(f"Case {case_id} has donations and cannot be deleted")
        self._cases.delete(case)
        logger.info("Case deleted: id=%s by=%s", case_id, principal.username)
