"""Repository for practice answer database operations."""

from sqlalchemy import RowMapping, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from doubtout.models.doubt import Doubt
from doubtout.models.practice_answer import PracticeAnswer, PracticeStatus
from doubtout.models.user import User


class PracticeAnswerRepository:
    """Handle practice answer persistence and review queries."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        doubt_id: int,
        student_id: int,
        answer_text: str,
    ) -> PracticeAnswer:
        """Create a new practice answer awaiting review."""
        practice_answer = PracticeAnswer(
            doubt_id=doubt_id,
            student_id=student_id,
            answer_text=answer_text,
            status=PracticeStatus.PENDING,
        )
        self.session.add(practice_answer)
        await self.session.flush()
        await self.session.refresh(practice_answer)
        return practice_answer

    async def get_by_id(self, practice_id: int) -> PracticeAnswer | None:
        """Retrieve a practice answer by its ID."""
        result = await self.session.execute(
            select(PracticeAnswer).where(PracticeAnswer.id == practice_id)
        )
        return result.scalar_one_or_none()

    async def mark_reviewed(
        self,
        practice_id: int,
        reviewer_id: int,
        status: PracticeStatus,
    ) -> int | None:
        """Move a PENDING practice answer to its final status.

        The status guard lives in the UPDATE itself so that two concurrent
        reviews cannot both succeed. Returns the authoring student's ID, or
        None when no pending practice answer matched.
        """
        result = await self.session.execute(
            update(PracticeAnswer)
            .where(
                PracticeAnswer.id == practice_id,
                PracticeAnswer.status == PracticeStatus.PENDING,
            )
            .values(status=status, reviewed_by=reviewer_id, reviewed_at=func.now())
            .returning(PracticeAnswer.student_id)
        )
        return result.scalar_one_or_none()

    async def list_pending_for_professor(self, professor_id: int) -> list[RowMapping]:
        """Retrieve pending practice answers on doubts the professor owns.

        Open-pool doubts (no assigned professor) belong to every professor.
        """
        student = aliased(User)
        result = await self.session.execute(
            select(
                PracticeAnswer.id.label("practice_id"),
                PracticeAnswer.answer_text,
                PracticeAnswer.status,
                PracticeAnswer.created_at,
                Doubt.id.label("doubt_id"),
                Doubt.question,
                Doubt.course,
                student.full_name.label("student_name"),
            )
            .join(Doubt, Doubt.id == PracticeAnswer.doubt_id)
            .join(student, student.id == PracticeAnswer.student_id)
            .where(
                PracticeAnswer.status == PracticeStatus.PENDING,
                or_(
                    Doubt.assigned_professor_id.is_(None),
                    Doubt.assigned_professor_id == professor_id,
                ),
            )
            .order_by(PracticeAnswer.created_at.asc(), PracticeAnswer.id.asc())
        )
        return list(result.mappings().all())

    async def count_by_status(self, student_id: int, status: PracticeStatus) -> int:
        """Count a student's practice answers in a given status."""
        result = await self.session.execute(
            select(func.count(PracticeAnswer.id)).where(
                PracticeAnswer.student_id == student_id,
                PracticeAnswer.status == status,
            )
        )
        return result.scalar_one()

    async def list_approved_for_student(self, student_id: int) -> list[RowMapping]:
        """Retrieve a student's approved answers with reviewer and question context."""
        reviewer = aliased(User)
        result = await self.session.execute(
            select(
                PracticeAnswer.id.label("practice_id"),
                PracticeAnswer.answer_text,
                PracticeAnswer.status,
                PracticeAnswer.reviewed_at,
                Doubt.question,
                Doubt.course,
                reviewer.full_name.label("professor_name"),
            )
            .join(Doubt, Doubt.id == PracticeAnswer.doubt_id)
            .join(reviewer, reviewer.id == PracticeAnswer.reviewed_by)
            .where(
                PracticeAnswer.student_id == student_id,
                PracticeAnswer.status == PracticeStatus.APPROVED,
            )
            .order_by(PracticeAnswer.reviewed_at.desc(), PracticeAnswer.id.desc())
        )
        return list(result.mappings().all())
