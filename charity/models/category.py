"""ORM model for case categories. Created out of band; read-mostly."""

from sqlalchemy import Column, Integer, String

from charity.models.base import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
