"""Pydantic schemas for categories."""

from pydantic import BaseModel


class CategoryRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
