"""Password hashing and access token helpers."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from doubtout.config import settings
from doubtout.exceptions import DomainValidationError, UnauthorizedError

BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int | None = None) -> None:
        self.rounds = rounds or settings.bcrypt_rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """Hash a plain-text password."""
        encoded = self._encode(password)
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Compare a password against a stored hash in constant time."""
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def burn(self, password: str) -> None:
        """Spend one verification worth of time without a stored hash.

        Keeps "unknown user" as slow as "wrong password".
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                b"doubtout-timing", bcrypt.gensalt(rounds=self.rounds)
            )
        encoded = password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
        bcrypt.checkpw(encoded, self._dummy_hash)

    @staticmethod
    def _encode(password: str) -> bytes:
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise DomainValidationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
                field="password",
            )
        return encoded


@dataclass
class TokenClaims:
    """Identity carried by a verified access token."""

    user_id: int
    role: str
    expires_at: datetime


def create_access_token(
    user_id: int,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for a logged-in user."""
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": str(user_id),
        "role": role,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims:
    """Verify an access token and return its claims.

    Raises:
        UnauthorizedError: If the token is malformed, forged or expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid token") from exc

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token")

    try:
        user_id = int(payload["sub"])
    except ValueError as exc:
        raise UnauthorizedError("Invalid token") from exc

    return TokenClaims(
        user_id=user_id,
        role=str(payload.get("role", "")),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )
