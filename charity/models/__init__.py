"""SQLAlchemy ORM models."""

from charity.models.base import Base
from charity.models.case import Case
from charity.models.category import Category
from charity.models.donation import Donation
from charity.models.user import User

__all__ = ["Base", "Case", "Category", "Donation", "User"]
