"""Repository for doubt database operations."""

from sqlalchemy import RowMapping, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from doubtout.models.answer import Answer
from doubtout.models.doubt import Doubt, DoubtStatus
from doubtout.models.user import User


class DoubtRepository:
    """Handle doubt persistence and the student/professor doubt views."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        asker_id: int,
        branch: str,
        semester: int,
        course: str,
        question: str,
        assigned_professor_id: int | None,
    ) -> Doubt:
        """Create a new doubt record with PENDING status."""
        doubt = Doubt(
            asker_id=asker_id,
            branch=branch,
            semester=semester,
            course=course,
            question=question,
            assigned_professor_id=assigned_professor_id,
            status=DoubtStatus.PENDING,
        )
        self.session.add(doubt)
        await self.session.flush()
        await self.session.refresh(doubt)
        return doubt

    async def get_by_id(self, doubt_id: int) -> Doubt | None:
        """Retrieve a doubt by its ID."""
        result = await self.session.execute(select(Doubt).where(Doubt.id == doubt_id))
        return result.scalar_one_or_none()

    async def exists(self, doubt_id: int) -> bool:
        """Check whether a doubt with this ID exists."""
        result = await self.session.execute(
            select(Doubt.id).where(Doubt.id == doubt_id)
        )
        return result.scalar_one_or_none() is not None

    async def mark_answered(self, doubt_id: int) -> None:
        """Transition a doubt to ANSWERED."""
        await self.session.execute(
            update(Doubt)
            .where(Doubt.id == doubt_id)
            .values(status=DoubtStatus.ANSWERED)
        )
        await self.session.flush()

    async def list_for_student(self, user_id: int) -> list[RowMapping]:
        """Retrieve a student's doubts with any answer and its author, newest first."""
        answerer = aliased(User)
        result = await self.session.execute(
            select(
                Doubt.id.label("question_id"),
                Doubt.question,
                Doubt.course,
                Doubt.status,
                Doubt.created_at,
                Answer.answer_text,
                Answer.created_at.label("answered_at"),
                answerer.full_name.label("answered_by_name"),
            )
            .outerjoin(Answer, Answer.doubt_id == Doubt.id)
            .outerjoin(answerer, answerer.id == Answer.answered_by)
            .where(Doubt.asker_id == user_id)
            .order_by(Doubt.created_at.desc(), Doubt.id.desc())
        )
        return list(result.mappings().all())

    async def list_unanswered_for_professor(self, professor_id: int) -> list[RowMapping]:
        """Retrieve unanswered doubts assigned to a professor or in the open pool."""
        student = aliased(User)
        result = await self.session.execute(
            select(
                Doubt.id.label("doubt_id"),
                Doubt.question,
                Doubt.course,
                Doubt.semester,
                Doubt.branch,
                Doubt.assigned_professor_id,
                Doubt.created_at,
                student.full_name.label("student_name"),
            )
            .join(student, student.id == Doubt.asker_id)
            .outerjoin(Answer, Answer.doubt_id == Doubt.id)
            .where(
                Answer.id.is_(None),
                or_(
                    Doubt.assigned_professor_id.is_(None),
                    Doubt.assigned_professor_id == professor_id,
                ),
            )
            .order_by(Doubt.created_at.desc(), Doubt.id.desc())
        )
        return list(result.mappings().all())

    async def list_answered(
        self,
        semester: int | None = None,
        course: str | None = None,
        search: str | None = None,
    ) -> list[RowMapping]:
        """Retrieve answered doubts with answer text and author name.

        All filters are optional and combined with AND; ``search`` is a
        case-insensitive substring match on the question text.
        """
        query = (
            select(
                Doubt.id.label("doubt_id"),
                Doubt.question,
                Doubt.course,
                Doubt.semester,
                Answer.answer_text,
                User.full_name.label("answered_by"),
            )
            .join(Answer, Answer.doubt_id == Doubt.id)
            .join(User, User.id == Answer.answered_by)
        )
        if semester is not None:
            query = query.where(Doubt.semester == semester)
        if course:
            query = query.where(Doubt.course == course)
        if search:
            pattern = f"%{_escape_like(search)}%"
            query = query.where(Doubt.question.ilike(pattern, escape="/"))

        result = await self.session.execute(
            query.order_by(Answer.created_at.desc(), Answer.id.desc())
        )
        return list(result.mappings().all())

    async def list_practice_questions(
        self,
        course: str,
        answered: bool | None = None,
    ) -> list[RowMapping]:
        """Retrieve a course's doubts with optional answer text, newest first."""
        query = (
            select(
                Doubt.id.label("doubt_id"),
                Doubt.question,
                Doubt.course,
                Answer.answer_text,
            )
            .outerjoin(Answer, Answer.doubt_id == Doubt.id)
            .where(Doubt.course == course)
        )
        if answered is True:
            query = query.where(Answer.id.is_not(None))
        elif answered is False:
            query = query.where(Answer.id.is_(None))

        result = await self.session.execute(
            query.order_by(Doubt.created_at.desc(), Doubt.id.desc())
        )
        return list(result.mappings().all())


def _escape_like(value: str) -> str:
    return value.replace("/", "//").replace("%", "/%").replace("_", "/_")
