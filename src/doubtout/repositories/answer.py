"""Repository for answer database operations."""

from sqlalchemy import RowMapping, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.models.answer import Answer
from doubtout.models.doubt import Doubt


class AnswerRepository:
    """Handle answer persistence operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        doubt_id: int,
        answer_text: str,
        answered_by: int,
    ) -> Answer:
        """Create a new answer record."""
        answer = Answer(
            doubt_id=doubt_id,
            answer_text=answer_text,
            answered_by=answered_by,
        )
        self.session.add(answer)
        await self.session.flush()
        await self.session.refresh(answer)
        return answer

    async def get_by_doubt_id(self, doubt_id: int) -> Answer | None:
        """Retrieve the answer linked to a doubt if it exists."""
        result = await self.session.execute(
            select(Answer).where(Answer.doubt_id == doubt_id)
        )
        return result.scalar_one_or_none()

    async def get_with_question(self, answer_id: int) -> RowMapping | None:
        """Retrieve an answer's text together with its parent question."""
        result = await self.session.execute(
            select(Answer.answer_text, Doubt.question)
            .join(Doubt, Doubt.id == Answer.doubt_id)
            .where(Answer.id == answer_id)
        )
        return result.mappings().one_or_none()

    async def update_text(self, answer_id: int, answer_text: str) -> bool:
        """Overwrite an answer's text. Returns False when no answer matched."""
        result = await self.session.execute(
            update(Answer)
            .where(Answer.id == answer_id)
            .values(answer_text=answer_text)
            .returning(Answer.id)
        )
        return result.scalar_one_or_none() is not None

    async def list_by_professor(self, professor_id: int) -> list[RowMapping]:
        """Retrieve a professor's answers with question context, newest first."""
        result = await self.session.execute(
            select(
                Answer.id.label("answer_id"),
                Answer.answer_text,
                Answer.created_at.label("answered_at"),
                Doubt.id.label("doubt_id"),
                Doubt.question,
                Doubt.course,
            )
            .join(Doubt, Doubt.id == Answer.doubt_id)
            .where(Answer.answered_by == professor_id)
            .order_by(Answer.created_at.desc(), Answer.id.desc())
        )
        return list(result.mappings().all())
