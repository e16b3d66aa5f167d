"""Points ledger and student leaderboard."""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.config import settings
from doubtout.exceptions import DomainValidationError, NotFoundError
from doubtout.models.user import User
from doubtout.repositories.user import UserRepository


class PointsLedger:
    """Per-user point counter. Points only ever go up."""

    def __init__(self, session: AsyncSession) -> None:
        self.users = UserRepository(session)

    async def award_points(self, user_id: int, amount: int) -> int:
        """Add ``amount`` points to a user and return the new total."""
        if amount <= 0:
            raise DomainValidationError(
                "Award amount must be positive", field="amount"
            )

        total = await self.users.increment_points(user_id, amount)
        if total is None:
            raise NotFoundError(resource="User", resource_id=user_id)

        logger.info("Points awarded", user_id=user_id, amount=amount, total=total)
        return total

    async def get_points(self, user_id: int) -> int:
        """Return a user's current points."""
        points = await self.users.get_points(user_id)
        if points is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return points

    async def leaderboard(self, limit: int | None = None) -> list[User]:
        """Return the top students by points, highest first."""
        if limit is None:
            limit = settings.leaderboard_limit
        if limit < 1:
            raise DomainValidationError("limit must be at least 1", field="limit")
        return await self.users.top_students(limit)

    async def dashboard(self, user_id: int) -> User:
        """Return the user shown on a student dashboard."""
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="Student", resource_id=user_id)
        return user
