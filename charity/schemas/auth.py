"""Request/response schemas for registration, login and the request principal."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from charity.schemas.case import CaseRead
from charity.schemas.donation import DonationRead

USERNAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128
EMAIL_MAX_LEN = 320


class Role(str, Enum):
    ADMIN = "ADMIN"
    REGULAR_USER = "REGULAR_USER"


class Principal(BaseModel):
    """Verified identity behind a request, taken from a valid access token. Lives for one request."""

    model_config = {"frozen": True}

    username: str
    role: Role


class IssuedToken(BaseModel):
    """Signed access token and the instant it stops being accepted."""

    token: str
    expires_at: datetime


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RegistrationRequest(BaseModel):
    """Sign-up payload. The role is never taken from the client."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)
    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN, pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    country: str = Field(default="", max_length=255)
    zip_code: int | None = Field(default=None, ge=0)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        username = v.strip()
        if not username:
            raise ValueError("username must not be blank")
        return username


class RegistrationFailure(str, Enum):
    USERNAME_TAKEN = "USERNAME_TAKEN"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    STORAGE_FAILURE = "STORAGE_FAILURE"


class RegistrationResult(BaseModel):
    """Outcome of a registration attempt: the new user id, or why it failed."""

    success: bool
    user_id: str | None = None
    failure: RegistrationFailure | None = None

    @classmethod
    def ok(cls, user_id: str) -> "RegistrationResult":
        return cls(success=True, user_id=user_id)

    @classmethod
    def failed(cls, failure: RegistrationFailure) -> "RegistrationResult":
        return cls(success=False, failure=failure)


class UserProfile(BaseModel):
    """Account summary returned at login and by the account lookup. No password hash."""

    username: str
    email: str
    cases: list[CaseRead] = Field(default_factory=list)
    donations: list[DonationRead] = Field(default_factory=list)


class LoginResult(BaseModel):
    """Successful login: bearer token, its expiry, and the caller's profile."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime
    profile: UserProfile
