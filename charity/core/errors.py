"""Domain error hierarchy. Each error knows how it surfaces to an API client."""

from typing import Any


class CharityError(Exception):
    """Base for all domain and infrastructure errors raised by services."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_response(self) -> dict[str, Any]:
        """Client-visible error envelope."""
        return {"error": {"code": self.code, "message": self.message}}


class BadCredentialsError(CharityError):
    """Login failed. Same message for unknown user and wrong password."""

    code = "BAD_CREDENTIALS"
    http_status = 401

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class InvalidTokenError(CharityError):
    """Bearer token is malformed, not signed with our secret, or expired."""

    code = "INVALID_TOKEN"
    http_status = 401

    def __init__(self, reason: str = "Invalid or expired token") -> None:
        super().__init__(reason)


class NotAuthenticatedError(CharityError):
    """Operation requires a principal and the request has none."""

    code = "NOT_AUTHENTICATED"
    http_status = 401

    def __init__(self) -> None:
        super().__init__("Not authenticated")


class NotFoundError(CharityError):
    """A looked-up entity does not exist."""

    code = "NOT_FOUND"
    http_status = 404
    entity = "Entity"

    def __init__(self, identifier: Any) -> None:
        self.identifier = identifier
        super().__init__(f"{self.entity} not found: {identifier}")


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    entity = "User"


class CaseNotFoundError(NotFoundError):
    code = "CASE_NOT_FOUND"
    entity = "Case"


class CategoryNotFoundError(NotFoundError):
    code = "CATEGORY_NOT_FOUND"
    entity = "Category"


class DomainValidationError(CharityError):
    """Input rejected by a business rule (e.g. non-positive donation amount)."""

    code = "VALIDATION_ERROR"
    http_status = 422


class DuplicateUserError(DomainValidationError):
    """Username or email already registered (unique constraint)."""

    code = "DUPLICATE_USER"
    http_status = 409


class StorageError(CharityError):
    """Persistence failed. The message is safe to show; the cause is chained."""

    code = "STORAGE_ERROR"
    http_status = 500
