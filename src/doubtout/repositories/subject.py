"""Repository for subject reference data."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.models.subject import Subject


class SubjectRepository:
    """Read subject reference data."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_for_semester(self, department_id: int, semester: int) -> list[Subject]:
        """Retrieve a department's subjects for a semester, ordered by name."""
        result = await self.session.execute(
            select(Subject)
            .where(Subject.department_id == department_id, Subject.semester == semester)
            .order_by(Subject.subject_name, Subject.id)
        )
        return list(result.scalars().all())
