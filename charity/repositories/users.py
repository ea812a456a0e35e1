"""User directory backed by the users table."""

import logging

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from charity.core.errors import DuplicateUserError, StorageError
from charity.models import User

logger = logging.getLogger(__name__)


class SqlUserDirectory:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_username(self, username: str) -> User | None:
        return self._session.scalars(
            select(User).where(User.username == username)
        ).first()

    def exists_by_username(self, username: str) -> bool:
        return bool(self._session.scalar(select(exists().where(User.username == username))))

    def exists_by_email(self, email: str) -> bool:
        return bool(self._session.scalar(select(exists().where(User.email == email))))

    def save(self, user: User) -> User:
        """Insert or update a user. Raises DuplicateUserError when a unique index rejects it."""
        try:
            self._session.add(user)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateUserError("Username or email already registered") from e
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.exception("Failed to save user")
            raise StorageError("Could not save user") from e
        self._session.refresh(user)
        return user
