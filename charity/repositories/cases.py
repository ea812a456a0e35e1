"""Case persistence. Never writes raised_amount; the donation repository owns that column."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from charity.core.errors import StorageError
from charity.models import Case

logger = logging.getLogger(__name__)


class SqlCaseRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_id(self, case_id: int) -> Case | None:
        return self._session.get(Case, case_id)

    def save(self, case: Case) -> Case:
        try:
            self._session.add(case)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception("Failed to save case id=%s", case.id)
            raise StorageError("Could not save case") from e
        self._session.refresh(case)
        return case

    def delete(self, case: Case) -> None:
        try:
            self._session.delete(case)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception("Failed to delete case id=%s", case.id)
            raise StorageError("Could not delete case") from e

    def find_all(self) -> list[Case]:
        return list(self._session.scalars(select(Case).order_by(Case.id)))

    def search(self, query: str) -> list[Case]:
        pattern = f"%{query}%"
        stmt = (
            select(Case)
            .where(or_(Case.title.ilike(pattern), Case.description.ilike(pattern)))
            .order_by(Case.id)
        )
        return list(self._session.scalars(stmt))

    def find_by_owner(self, user_id: str) -> list[Case]:
        return list(
            self._session.scalars(select(Case).where(Case.user_id == user_id).order_by(Case.id))
        )

    def find_by_category(self, category_id: int) -> list[Case]:
        return list(
            self._session.scalars(
                select(Case).where(Case.category_id == category_id).order_by(Case.id)
            )
        )
