"""Repository for user database operations."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.models.user import User, UserRole


class UserRepository:
    """Handle user persistence and the points counter."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        email: str,
        full_name: str,
        password_hash: str,
        role: UserRole,
    ) -> User:
        """Create a new user with zero points."""
        user = User(
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            role=role,
            points=0,
        )
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieve a user by its ID."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by email regardless of role."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_email_and_role(self, email: str, role: UserRole) -> User | None:
        """Retrieve a user only when both email and role match."""
        result = await self.session.execute(
            select(User).where(User.email == email, User.role == role)
        )
        return result.scalar_one_or_none()

    async def list_by_role(self, role: UserRole) -> list[User]:
        """Retrieve all users holding a role, ordered by name."""
        result = await self.session.execute(
            select(User).where(User.role == role).order_by(User.full_name, User.id)
        )
        return list(result.scalars().all())

    async def increment_points(self, user_id: int, amount: int) -> int | None:
        """Atomically add to a user's points and return the new total.

        Returns None when no user matched.
        """
        result = await self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(points=User.points + amount)
            .returning(User.points)
        )
        return result.scalar_one_or_none()

    async def get_points(self, user_id: int) -> int | None:
        """Return a user's points, or None if the user does not exist."""
        result = await self.session.execute(
            select(User.points).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def top_students(self, limit: int) -> list[User]:
        """Retrieve the highest scoring students, best first."""
        result = await self.session.execute(
            select(User)
            .where(User.role == UserRole.STUDENT)
            .order_by(User.points.desc(), User.id.asc())
            .limit(limit)
        )
        return list(result.scalars().all())
