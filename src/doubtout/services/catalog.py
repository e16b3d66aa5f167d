"""Read-only views: archive search, practice questions, professors, subjects."""

from sqlalchemy import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.exceptions import DomainValidationError
from doubtout.models.subject import Subject
from doubtout.models.user import User, UserRole
from doubtout.repositories.doubt import DoubtRepository
from doubtout.repositories.subject import SubjectRepository
from doubtout.repositories.user import UserRepository

PRACTICE_FILTERS = {"answered": True, "unanswered": False}


class CatalogService:
    """Compose read-only joined views over doubts, answers and users."""

    def __init__(self, session: AsyncSession) -> None:
        self.doubts = DoubtRepository(session)
        self.users = UserRepository(session)
        self.subjects = SubjectRepository(session)

    async def archive(
        self,
        semester: int | None = None,
        course: str | None = None,
        search: str | None = None,
    ) -> list[RowMapping]:
        """Search answered doubts; every filter is optional."""
        return await self.doubts.list_answered(
            semester=semester,
            course=course.strip() if course else None,
            search=search.strip() if search else None,
        )

    async def practice_questions(
        self,
        course: str,
        status: str | None = None,
    ) -> list[RowMapping]:
        """Return a course's doubts, optionally only answered or unanswered ones."""
        if not course or not course.strip():
            raise DomainValidationError("course required", field="course")
        if status and status not in PRACTICE_FILTERS:
            raise DomainValidationError(
                "status must be 'answered' or 'unanswered'", field="status"
            )
        return await self.doubts.list_practice_questions(
            course=course.strip(),
            answered=PRACTICE_FILTERS.get(status) if status else None,
        )

    async def professors_list(self) -> list[User]:
        """Return every professor."""
        return await self.users.list_by_role(UserRole.PROFESSOR)

    async def subjects_list(self, department_id: int, semester: int) -> list[Subject]:
        """Return a department's subjects for a semester, by name."""
        return await self.subjects.list_for_semester(department_id, semester)
