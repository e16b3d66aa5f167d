"""Professor answers: submission, editing and per-professor history."""

from loguru import logger
from sqlalchemy import RowMapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.db import transaction
from doubtout.exceptions import DomainValidationError, DuplicateAnswerError, NotFoundError
from doubtout.models.answer import Answer
from doubtout.models.user import UserRole
from doubtout.repositories.answer import AnswerRepository
from doubtout.repositories.doubt import DoubtRepository
from doubtout.repositories.user import UserRepository


def _require_text(answer_text: str | None) -> str:
    """Return trimmed answer text, rejecting blank input."""
    if answer_text is None or not answer_text.strip():
        raise DomainValidationError("Answer text required", field="answer_text")
    return answer_text.strip()


class AnswerService:
    """Answer doubts and keep each doubt's status in step with its answer."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.answers = AnswerRepository(session)
        self.doubts = DoubtRepository(session)
        self.users = UserRepository(session)

    async def submit(self, doubt_id: int, answer_text: str, answered_by: int) -> Answer:
        """Store an answer and mark its doubt ANSWERED in one transaction.

        Raises:
            DomainValidationError: If a field is missing, the text is blank,
                or ``answered_by`` is not a professor.
            NotFoundError: If the doubt does not exist.
            DuplicateAnswerError: If the doubt already has an answer.
        """
        if not doubt_id or not answered_by:
            raise DomainValidationError("Missing fields")
        text = _require_text(answer_text)

        if not await self.doubts.exists(doubt_id):
            raise NotFoundError(resource="Doubt", resource_id=doubt_id)

        author = await self.users.get_by_id(answered_by)
        if author is None or author.role != UserRole.PROFESSOR:
            raise DomainValidationError(
                "answered_by must reference a professor", field="answered_by"
            )

        if await self.answers.get_by_doubt_id(doubt_id) is not None:
            raise DuplicateAnswerError(doubt_id)

        try:
            async with transaction(self.session):
                answer = await self.answers.create(
                    doubt_id=doubt_id,
                    answer_text=text,
                    answered_by=answered_by,
                )
                await self.doubts.mark_answered(doubt_id)
        except IntegrityError as exc:
            # Another professor answered between the check and the insert
            raise DuplicateAnswerError(doubt_id) from exc

        logger.info(
            "Answer submitted",
            answer_id=answer.id,
            doubt_id=doubt_id,
            answered_by=answered_by,
        )
        return answer

    async def get(self, answer_id: int) -> RowMapping:
        """Return an answer's text with its parent question."""
        row = await self.answers.get_with_question(answer_id)
        if row is None:
            raise NotFoundError(resource="Answer", resource_id=answer_id)
        return row

    async def update(self, answer_id: int, answer_text: str) -> None:
        """Overwrite an answer's text. The doubt's status is left alone."""
        text = _require_text(answer_text)
        if not await self.answers.update_text(answer_id, text):
            raise NotFoundError(resource="Answer", resource_id=answer_id)

        logger.info("Answer updated", answer_id=answer_id)

    async def list_by_professor(self, professor_id: int) -> list[RowMapping]:
        """Return a professor's answers, most recent first."""
        return await self.answers.list_by_professor(professor_id)
