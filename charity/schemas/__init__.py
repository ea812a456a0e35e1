"""Pydantic request/response schemas."""

from charity.schemas.auth import (
    IssuedToken,
    LoginRequest,
    LoginResult,
    Principal,
    RegistrationFailure,
    RegistrationRequest,
    RegistrationResult,
    Role,
    UserProfile,
)
from charity.schemas.case import CaseCreate, CaseRead, CaseStatus, CaseUpdate
from charity.schemas.category import CategoryRead
from charity.schemas.donation import DonationCreate, DonationRead, PaymentMethod
from charity.schemas.health import HealthResponse

__all__ = [
    "CaseCreate",
    "CaseRead",
    "CaseStatus",
    "CaseUpdate",
    "CategoryRead",
    "DonationCreate",
    "DonationRead",
    "HealthResponse",
    "IssuedToken",
    "LoginRequest",
    "LoginResult",
    "PaymentMethod",
    "Principal",
    "RegistrationFailure",
    "RegistrationRequest",
    "RegistrationResult",
    "Role",
    "UserProfile",
]
