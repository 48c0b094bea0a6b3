"""Security primitives — bcrypt password hashing and JWT session tokens."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from gamestore.core.exceptions import UnauthorizedException
from gamestore.domain.schemas.auth import TokenClaims

INVALID_TOKEN_MESSAGE = "Token inválido o expirado"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PasswordHasher:
    """One-way adaptive hash. `rounds` is the bcrypt work factor."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed_password: str) -> bool:
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            # Unrecognized or corrupt stored hash
            return False


class TokenIssuer:
    """
    Signs and verifies stateless session tokens.

    Tokens carry `sub` (user id), an optional `email`, `iat` and `exp`.
    A token is accepted up to and including its `exp` second.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = lifetime
        self._clock = clock

    def issue(self, user_id: int, email: Optional[str] = None) -> str:
        issued_at = int(self._clock().timestamp())
        claims = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + int(self._lifetime.total_seconds()),
        }
        if email is not None:
            claims["email"] = email
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Return the token claims or raise UnauthorizedException."""
        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
            claims = TokenClaims.model_validate(payload)
        except (JWTError, ValidationError, AttributeError):
            raise UnauthorizedException(INVALID_TOKEN_MESSAGE)

        if claims.exp < int(self._clock().timestamp()):
            raise UnauthorizedException(INVALID_TOKEN_MESSAGE)
        return claims
