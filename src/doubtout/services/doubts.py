"""Doubt submission and the student/professor doubt views."""

from loguru import logger
from sqlalchemy import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.exceptions import DomainValidationError, NotFoundError
from doubtout.models.doubt import Doubt
from doubtout.models.user import UserRole
from doubtout.repositories.doubt import DoubtRepository
from doubtout.repositories.user import UserRepository

_NO_PROFESSOR = ("", "null", "none")


def normalize_professor_id(professor_id: int | str | None) -> int | None:
    """Coerce an optional professor reference to an integer or None."""
    if professor_id is None:
        return None
    if isinstance(professor_id, str):
        if professor_id.strip().lower() in _NO_PROFESSOR:
            return None
        try:
            professor_id = int(professor_id)
        except ValueError as exc:
            raise DomainValidationError(
                "professor must be a user id", field="professor"
            ) from exc
    return professor_id or None


class DoubtService:
    """Store student doubts and read them back per student or professor."""

    def __init__(self, session: AsyncSession) -> None:
        self.doubts = DoubtRepository(session)
        self.users = UserRepository(session)

    async def submit(
        self,
        asker_id: int,
        branch: str,
        semester: int,
        course: str,
        question: str,
        professor_id: int | str | None = None,
    ) -> Doubt:
        """Store a new PENDING doubt.

        Raises:
            DomainValidationError: If a required field is missing or blank,
                or the assigned professor is not a professor.
            NotFoundError: If the asking user does not exist.
        """
        required = {
            "user_id": asker_id,
            "branch": branch,
            "semester": semester,
            "course": course,
            "question": question,
        }
        missing = [
            name
            for name, value in required.items()
            if not value or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise DomainValidationError(
                "Missing required fields", details={"missing": missing}
            )

        if await self.users.get_by_id(asker_id) is None:
            raise NotFoundError(resource="User", resource_id=asker_id)

        assigned_professor_id = normalize_professor_id(professor_id)
        if assigned_professor_id is not None:
            professor = await self.users.get_by_id(assigned_professor_id)
            if professor is None or professor.role != UserRole.PROFESSOR:
                raise DomainValidationError(
                    "professor must reference a professor", field="professor"
                )

        doubt = await self.doubts.create(
            asker_id=asker_id,
            branch=branch.strip(),
            semester=semester,
            course=course.strip(),
            question=question.strip(),
            assigned_professor_id=assigned_professor_id,
        )

        logger.info(
            "Doubt submitted",
            doubt_id=doubt.id,
            asker_id=asker_id,
            assigned_professor_id=doubt.assigned_professor_id,
        )
        return doubt

    async def list_for_student(self, user_id: int) -> list[RowMapping]:
        """Return a student's doubts with answers, most recent first."""
        return await self.doubts.list_for_student(user_id)

    async def list_for_professor(self, professor_id: int) -> list[RowMapping]:
        """Return unanswered doubts assigned to the professor or unassigned."""
        return await self.doubts.list_unanswered_for_professor(professor_id)
