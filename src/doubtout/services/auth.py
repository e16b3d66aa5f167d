"""Credential store: signup, credential checks and token issuing."""

import re
from dataclasses import dataclass

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.config import settings
from doubtout.exceptions import DuplicateEmailError, ForbiddenError, NotFoundError
from doubtout.models.user import User, UserRole
from doubtout.repositories.user import UserRepository
from doubtout.security import PasswordHasher, create_access_token, decode_access_token


@dataclass
class UserSummary:
    """A user record without its password hash."""

    id: int
    email: str
    full_name: str
    role: UserRole
    points: int

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            points=user.points,
        )


class AuthService:
    """Register users and verify their credentials."""

    def __init__(
        self,
        session: AsyncSession,
        password_hasher: PasswordHasher | None = None,
        allowed_email_pattern: str | None = None,
    ) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.password_hasher = password_hasher or PasswordHasher()
        self.allowed_email = re.compile(
            allowed_email_pattern or settings.allowed_email_pattern
        )

    def check_email_allowed(self, email: str) -> None:
        """Reject emails outside the institutional domain."""
        if not self.allowed_email.fullmatch(email):
            raise ForbiddenError(
                "Only institutional email addresses are allowed",
                details={"field": "email"},
            )

    async def register(
        self,
        email: str,
        password: str,
        full_name: str,
        role: UserRole,
    ) -> User:
        """Create a user with a hashed password and zero points.

        Raises:
            ForbiddenError: If the email is outside the allowed domain.
            DuplicateEmailError: If the email is already registered.
        """
        self.check_email_allowed(email)

        if await self.users.get_by_email(email) is not None:
            raise DuplicateEmailError(email)

        password_hash = self.password_hasher.hash(password)
        try:
            user = await self.users.create(
                email=email,
                full_name=full_name,
                password_hash=password_hash,
                role=role,
            )
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateEmailError(email) from exc

        logger.info("User registered", user_id=user.id, role=str(role))
        return user

    async def authenticate(
        self,
        email: str,
        password: str,
        role: UserRole,
    ) -> UserSummary | None:
        """Return the matching user, or None for any kind of mismatch."""
        user = await self.users.get_by_email_and_role(email, role)
        if user is None:
            self.password_hasher.burn(password)
            logger.info("Login rejected", role=str(role))
            return None

        if not self.password_hasher.verify(password, user.password_hash):
            logger.info("Login rejected", role=str(role))
            return None

        logger.info("Login succeeded", user_id=user.id, role=str(role))
        return UserSummary.from_user(user)

    @staticmethod
    def issue_token(user: UserSummary) -> str:
        """Create a signed access token for an authenticated user."""
        return create_access_token(user_id=user.id, role=str(user.role))

    async def resolve_token(self, token: str) -> UserSummary:
        """Return the user a valid access token was issued to.

        Raises:
            UnauthorizedError: If the token does not verify.
            NotFoundError: If the user no longer exists.
        """
        claims = decode_access_token(token)
        user = await self.users.get_by_id(claims.user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=claims.user_id)
        return UserSummary.from_user(user)
