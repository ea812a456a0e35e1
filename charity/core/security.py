"""Password hashing and JWT issuance/validation for authentication."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from functools import cached_property
from typing import TYPE_CHECKING, Any, TypeVar

import bcrypt
import jwt

from charity.core.clock import Clock, SystemClock
from charity.core.errors import InvalidTokenError
from charity.schemas.auth import IssuedToken, Principal, Role

if TYPE_CHECKING:
    from charity.core.config import Settings

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of the input.
BCRYPT_MAX_BYTES = 72

# Claims every access token must carry; anything else is an extra claim.
REQUIRED_CLAIMS = ("sub", "role", "iat", "exp")

# Registered claims PyJWT checks on decode; not accepted as extra claims.
RESERVED_EXTRA_CLAIMS = ("aud", "iss", "nbf", "jti")

T = TypeVar("T")


class PasswordVerifier:
    """Salted, adaptive one-way hashing of passwords (bcrypt)."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    @staticmethod
    def _encode(plain_password: str) -> bytes:
        # bcrypt has a 72-byte limit; truncate to avoid errors (schemas already limit length).
        return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. The salt is embedded in the result."""
        return bcrypt.hashpw(
            self._encode(plain_password), bcrypt.gensalt(rounds=self._rounds)
        ).decode("utf-8")

    def matches(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash (constant-time compare inside bcrypt)."""
        try:
            return bcrypt.checkpw(self._encode(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash("dummy-password-for-timing")

    def burn(self, plain_password: str) -> None:
        """Spend one verification's worth of work; used when there is no user to check against."""
        self.matches(plain_password, self._dummy_hash)


class TokenService:
    """
    Issues and validates self-contained, HMAC-signed access tokens (JWT).

    Validation depends only on the token, the clock and the secret; nothing is
    stored server-side, so a token stays valid until exp.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        algorithm: str = "HS256",
        clock: Clock | None = None,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        if ttl <= timedelta(0):
            raise ValueError("Token TTL must be positive")
        self._secret = secret
        self._ttl_seconds = int(ttl.total_seconds())
        self._algorithm = algorithm
        self._clock = clock or SystemClock()

    @classmethod
    def from_settings(cls, settings: "Settings", clock: Clock | None = None) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
            clock=clock,
        )

    def issue(
        self,
        principal: Principal,
        extra_claims: dict[str, Any] | None = None,
    ) -> IssuedToken:
        """Create a signed token for principal. Core claims override same-named extra claims.

        Raises ValueError if extra_claims uses a reserved registered claim (aud, iss, nbf, jti).
        """
        reserved = sorted(set(extra_claims or {}) & set(RESERVED_EXTRA_CLAIMS))
        if reserved:
            raise ValueError(f"Reserved claims cannot be passed as extra claims: {', '.join(reserved)}")
        issued_at = int(self._clock.now().timestamp())
        expires = issued_at + self._ttl_seconds
        payload: dict[str, Any] = dict(extra_claims or {})
        payload.update(
            {
                "sub": principal.username,
                "role": principal.role.value,
                "iat": issued_at,
                "exp": expires,
            }
        )
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=datetime.fromtimestamp(expires, UTC))

    def validate(self, token: str) -> Principal:
        """
        Verify signature, shape and expiry; return the embedded principal.
        Raises InvalidTokenError when the token is tampered, malformed or expired.
        """
        claims = self._verified_claims(token)
        now = self._clock.now().timestamp()
        if now >= claims["exp"]:
            raise InvalidTokenError("Token has expired")
        return Principal(username=claims["sub"], role=Role(claims["role"]))

    def extract_claim(self, token: str, selector: str | Callable[[dict[str, Any]], T]) -> Any:
        """
        Read one claim from a correctly signed token, by name or with a callable over all claims.
        Expiry is not enforced here; the signature is.
        """
        claims = self._verified_claims(token)
        if callable(selector):
            return selector(claims)
        if selector not in claims:
            raise InvalidTokenError(f"Token has no '{selector}' claim")
        return claims[selector]

    def _verified_claims(self, token: str) -> dict[str, Any]:
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Token is empty")
        try:
            # exp/iat are checked against our own clock below, not PyJWT's wall clock.
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": list(REQUIRED_CLAIMS),
                },
            )
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise InvalidTokenError() from e
        _check_claim_types(claims)
        return claims


def _check_claim_types(claims: dict[str, Any]) -> None:
    """Signed but semantically malformed payloads are rejected like forged ones."""
    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub.strip():
        raise InvalidTokenError("Invalid token payload")
    for key in ("iat", "exp"):
        value = claims.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidTokenError("Invalid token payload")
    if claims["iat"] >= claims["exp"]:
        raise InvalidTokenError("Invalid token payload")
    try:
        Role(claims.get("role"))
    except ValueError as e:
        raise InvalidTokenError("Invalid token payload") from e
