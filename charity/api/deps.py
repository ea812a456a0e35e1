"""FastAPI dependencies: per-request services and the authentication/authorization chain."""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from charity.core.config import get_settings
from charity.core.database import get_db
from charity.core.errors import NotAuthenticatedError
from charity.core.security import PasswordVerifier, TokenService
from charity.repositories import (
    SqlCaseRepository,
    SqlCategoryRepository,
    SqlDonationRepository,
    SqlUserDirectory,
)
from charity.schemas.auth import Principal
from charity.services.authentication import AuthenticationService
from charity.services.cases import CaseService
from charity.services.categories import CategoryService
from charity.services.donation_ledger import DonationLedger
from charity.services.request_auth import Access, AuthorizationGuard, RequestAuthenticator
from charity.services.users import UserService

security = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service; holds only the read-only secret and TTL."""
    return TokenService.from_settings(get_settings())


@lru_cache
def get_password_verifier() -> PasswordVerifier:
    return PasswordVerifier(rounds=get_settings().BCRYPT_ROUNDS)


def get_request_authenticator(
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> RequestAuthenticator:
    return RequestAuthenticator(tokens)


def get_user_service(db: Annotated[Session, Depends(get_db)]) -> UserService:
    return UserService(SqlUserDirectory(db), SqlCaseRepository(db), SqlDonationRepository(db))


def get_authentication_service(
    db: Annotated[Session, Depends(get_db)],
    passwords: Annotated[PasswordVerifier, Depends(get_password_verifier)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    profiles: Annotated[UserService, Depends(get_user_service)],
) -> AuthenticationService:
    return AuthenticationService(SqlUserDirectory(db), passwords, tokens, profiles)


def get_donation_ledger(db: Annotated[Session, Depends(get_db)]) -> DonationLedger:
    return DonationLedger(SqlUserDirectory(db), SqlCaseRepository(db), SqlDonationRepository(db))


def get_case_service(db: Annotated[Session, Depends(get_db)]) -> CaseService:
    return CaseService(
        SqlCaseRepository(db),
        SqlUserDirectory(db),
        SqlCategoryRepository(db),
        SqlDonationRepository(db),
    )


def get_category_service(db: Annotated[Session, Depends(get_db)]) -> CategoryService:
    return CategoryService(SqlCategoryRepository(db))


def get_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    authenticator: Annotated[RequestAuthenticator, Depends(get_request_authenticator)],
) -> Principal | None:
    """
    Dependency: resolve the caller from the Bearer token, or None when no token was sent.
    A token that does not validate raises InvalidTokenError (401), even on public endpoints.
    The principal is kept on request.state for the rest of this request only.
    """
    principal = authenticator.authenticate(
        credentials.credentials if credentials is not None else None
    )
    request.state.principal = principal
    return principal


def require_access(access: Access) -> Callable[..., Principal | None]:
    """Dependency factory enforcing an endpoint's declared access level before its handler runs."""
    guard = AuthorizationGuard()

    def dependency(
        principal: Annotated[Principal | None, Depends(get_principal)],
    ) -> Principal | None:
        return guard.check(principal, access)

    return dependency


def require_operation(operation: str) -> Callable[..., Principal | None]:
    """Like require_access, with the level looked up from the operation policy table."""
    guard = AuthorizationGuard()

    def dependency(
        principal: Annotated[Principal | None, Depends(get_principal)],
    ) -> Principal | None:
        return guard.check_operation(principal, operation)

    return dependency


def get_current_principal(
    principal: Annotated[Principal | None, Depends(get_principal)],
) -> Principal:
    """Dependency: the authenticated caller. Raises NotAuthenticatedError (401) when anonymous."""
    if principal is None:
        raise NotAuthenticatedError()
    return principal
