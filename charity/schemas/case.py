"""Pydantic schemas for fundraising cases."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 10_000
IMAGE_URL_MAX_LENGTH = 2048


class CaseStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CaseCreate(BaseModel):
    """Fields a user supplies when opening a case. The image is an already-uploaded URL."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    image_url: str | None = Field(default=None, max_length=IMAGE_URL_MAX_LENGTH)
    goal_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category_name: str = Field(..., min_length=1, max_length=255)


class CaseUpdate(BaseModel):
    """Editable case fields. raised_amount is deliberately absent."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    goal_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    image_url: str | None = Field(
        default=None,
        max_length=IMAGE_URL_MAX_LENGTH,
        description="New image URL; None keeps the current image.",
    )


class CaseRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    title: str
    description: str
    image_url: str | None
    goal_amount: Decimal
    raised_amount: Decimal
    status: CaseStatus
    category_id: int
    user_id: str
    created_at: datetime | None = None
