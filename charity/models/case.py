"""ORM model for fundraising cases."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)

from charity.models.base import Base
from charity.schemas.case import CaseStatus


class Case(Base):
    """
    A fundraising case owned by a user and filed under a category.

    raised_amount always equals the sum of the case's donation amounts; only the
    donation ledger changes it, through a single relative UPDATE.
    """

    __tablename__ = "cases"
    __table_args__ = (
        CheckConstraint("goal_amount > 0", name="ck_cases_goal_positive"),
        CheckConstraint("raised_amount >= 0", name="ck_cases_raised_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(2048), nullable=True)
    goal_amount = Column(Numeric(12, 2), nullable=False)
    raised_amount = Column(Numeric(12, 2), nullable=False, default=0, server_default="0")
    status = Column(String(16), nullable=False, default=CaseStatus.APPROVED.value)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
