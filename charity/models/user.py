"""ORM model for application users (auth and role-based access control)."""

import uuid

from sqlalchemy import Column, Integer, String

from charity.models.base import Base
from charity.schemas.auth import Role


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    Registered account.

    role: 'ADMIN' or 'REGULAR_USER'. Cases and donations reference the user by
    foreign key; query them explicitly instead of walking relationships.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    role = Column(String(32), nullable=False, default=Role.REGULAR_USER.value)
    first_name = Column(String(255), nullable=False, default="")
    last_name = Column(String(255), nullable=False, default="")
    country = Column(String(255), nullable=False, default="")
    zip_code = Column(Integer, nullable=True)
