"""Per-request principal resolution and the coarse access policy.

Both classes are stateless: the only thing shared between requests is the
read-only signing secret inside TokenService.
"""

import logging
from enum import Enum

from charity.core.errors import NotAuthenticatedError
from charity.core.security import TokenService
from charity.schemas.auth import Principal

logger = logging.getLogger(__name__)


class Access(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"


# Operations that need a logged-in caller; everything not listed is public.
OPERATION_ACCESS: dict[str, Access] = {
    "users.account": Access.AUTHENTICATED,
    "cases.create": Access.AUTHENTICATED,
    "cases.update": Access.AUTHENTICATED,
    "cases.delete": Access.AUTHENTICATED,
    "donations.make": Access.AUTHENTICATED,
}


class RequestAuthenticator:
    """Turns the request's bearer credential (if any) into a Principal."""

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self, bearer_token: str | None) -> Principal | None:
        """
        No credential: anonymous (None). A credential that fails validation raises
        InvalidTokenError; it never degrades to anonymous.
        """
        if bearer_token is None:
            return None
        return self._tokens.validate(bearer_token)


class AuthorizationGuard:
    """
    Allows or denies by "authenticated vs anonymous" only. The role claim travels
    in the principal but is not checked here.
    """

    def check(self, principal: Principal | None, access: Access) -> Principal | None:
        if access is Access.AUTHENTICATED and principal is None:
            raise NotAuthenticatedError()
        return principal

    def check_operation(self, principal: Principal | None, operation: str) -> Principal | None:
        access = OPERATION_ACCESS.get(operation, Access.PUBLIC)
        if access is Access.AUTHENTICATED and principal is None:
            logger.info("Denied anonymous call to %s", operation)
        return self.check(principal, access)
