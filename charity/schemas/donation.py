"""Pydantic schemas for donations."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"


class DonationCreate(BaseModel):
    """Donation request body; the donor comes from the authenticated principal."""

    case_id: int = Field(..., ge=1)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod


class DonationRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    amount: Decimal
    payment_method: PaymentMethod
    case_id: int
    user_id: str
    created_at: datetime | None = None
