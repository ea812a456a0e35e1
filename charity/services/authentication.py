"""Registration and credential login. Issues access tokens; keeps no session state."""

import logging

from charity.core.errors import BadCredentialsError, DuplicateUserError, StorageError
from charity.core.repository_protocols import UserDirectory
from charity.core.security import PasswordVerifier, TokenService
from charity.models import User
from charity.schemas.auth import (
    LoginResult,
    Principal,
    RegistrationFailure,
    RegistrationRequest,
    RegistrationResult,
    Role,
)
from charity.services.users import UserService

logger = logging.getLogger(__name__)


class AuthenticationService:
    def __init__(
        self,
        users: UserDirectory,
        passwords: PasswordVerifier,
        tokens: TokenService,
        profiles: UserService,
    ) -> None:
        self._users = users
        self._passwords = passwords
        self._tokens = tokens
        self._profiles = profiles

    def register(self, candidate: RegistrationRequest) -> RegistrationResult:
        """
        Create a REGULAR_USER account with a hashed password.

        The existence checks give friendly reasons; the unique indexes are what
        actually guarantee uniqueness, so a lost race still comes back as a failure.
        """
        if self._users.exists_by_username(candidate.username):
            return RegistrationResult.failed(RegistrationFailure.USERNAME_TAKEN)
        if self._users.exists_by_email(candidate.email):
            return RegistrationResult.failed(RegistrationFailure.EMAIL_TAKEN)

        user = User(
            username=candidate.username,
            email=candidate.email,
            password_hash=self._passwords.hash(candidate.password),
            role=Role.REGULAR_USER.value,
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            country=candidate.country,
            zip_code=candidate.zip_code,
        )
        try:
            saved = self._users.save(user)
        except DuplicateUserError:
            logger.info("Registration lost uniqueness race: username=%s", candidate.username)
            return RegistrationResult.failed(RegistrationFailure.CONSTRAINT_VIOLATION)
        except StorageError:
            return RegistrationResult.failed(RegistrationFailure.STORAGE_FAILURE)

        logger.info("Registered user: username=%s id=%s", saved.username, saved.id)
        return RegistrationResult.ok(saved.id)

    def login(self, username: str, password: str) -> LoginResult:
        """
        Check credentials and issue a token.
        Raises BadCredentialsError, identical for unknown user and wrong password.
        """
        user = self._users.find_by_username(username)
        if user is None:
            self._passwords.burn(password)
            logger.warning("Login rejected: username=%s", username)
            raise BadCredentialsError()
        if not self._passwords.matches(password, user.password_hash):
            logger.warning("Login rejected: username=%s", username)
            raise BadCredentialsError()

        issued = self._tokens.issue(Principal(username=user.username, role=Role(user.role)))
        logger.info("Login succeeded: username=%s", user.username)
        return LoginResult(
            access_token=issued.token,
            expires_at=issued.expires_at,
            profile=self._profiles.profile_for(user),
        )

    def username_taken(self, username: str) -> bool:
        return self._users.exists_by_username(username)

    def email_taken(self, email: str) -> bool:
        return self._users.exists_by_email(email)
