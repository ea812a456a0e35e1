"""Donation persistence: the donation row and the case total move together."""

import logging

from sqlalchemy import exists, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from charity.core.errors import CaseNotFoundError, StorageError
from charity.models import Case, Donation

logger = logging.getLogger(__name__)


class SqlDonationRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, donation: Donation) -> Donation:
        """
        Insert the donation and add its amount to cases.raised_amount in one transaction.

        The relative UPDATE runs first so the case row (or, on SQLite, the database)
        is write-locked until commit; concurrent donors queue behind it instead of
        overwriting each other's total. Either both writes commit or neither does.
        """
        try:
            result = self._session.execute(
                update(Case)
                .where(Case.id == donation.case_id)
                .values(raised_amount=Case.raised_amount + donation.amount)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise CaseNotFoundError(donation.case_id)
            self._session.add(donation)
            self._session.commit()
        except CaseNotFoundError:
            self._session.rollback()
            raise
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception("Failed to record donation for case_id=%s", donation.case_id)
            raise StorageError("Could not record donation") from e
        self._session.refresh(donation)
        return donation

    def find_by_case(self, case_id: int) -> list[Donation]:
        return list(
            self._session.scalars(
                select(Donation).where(Donation.case_id == case_id).order_by(Donation.id)
            )
        )

    def find_by_user(self, user_id: str) -> list[Donation]:
        return list(
            self._session.scalars(
                select(Donation).where(Donation.user_id == user_id).order_by(Donation.id)
            )
        )

    def exists_for_case(self, case_id: int) -> bool:
        return bool(self._session.scalar(select(exists().where(Donation.case_id == case_id))))
