"""Practice answer submission and the professor review workflow.

A practice answer starts PENDING and is reviewed exactly once, to either
APPROVED or REJECTED. Approval awards the authoring student a fixed number
of points in the same transaction as the status change.
"""

from dataclasses import dataclass, field

from loguru import logger
from sqlalchemy import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.config import settings
from doubtout.db import transaction
from doubtout.exceptions import DomainValidationError, NotFoundError
from doubtout.models.practice_answer import PracticeAnswer, PracticeStatus
from doubtout.models.user import UserRole
from doubtout.repositories.doubt import DoubtRepository
from doubtout.repositories.practice_answer import PracticeAnswerRepository
from doubtout.repositories.user import UserRepository
from doubtout.services.points import PointsLedger

REVIEW_ACTIONS = (PracticeStatus.APPROVED, PracticeStatus.REJECTED)


@dataclass
class ReviewOutcome:
    """Result of a completed review."""

    practice_id: int
    status: PracticeStatus
    student_id: int
    points_awarded: int = 0


@dataclass
class Contributions:
    """A student's practice answer tallies."""

    pending_count: int
    approved_count: int
    approved_answers: list[RowMapping] = field(default_factory=list)


def parse_review_action(action: str | None) -> PracticeStatus:
    """Translate a review action string into the target status."""
    try:
        status = PracticeStatus(action)
    except ValueError:
        status = None
    if status not in REVIEW_ACTIONS:
        raise DomainValidationError("Invalid action", field="action")
    return status


class PracticeReviewService:
    """Collect student practice answers and let professors review them."""

    def __init__(
        self,
        session: AsyncSession,
        award_points: int | None = None,
    ) -> None:
        self.session = session
        self.practice_answers = PracticeAnswerRepository(session)
        self.doubts = DoubtRepository(session)
        self.users = UserRepository(session)
        self.ledger = PointsLedger(session)
        self.award_points = (
            settings.practice_award_points if award_points is None else award_points
        )
        if self.award_points <= 0:
            raise ValueError("award_points must be positive")

    async def submit_practice(
        self,
        doubt_id: int,
        student_id: int,
        answer_text: str,
    ) -> PracticeAnswer:
        """Store a PENDING practice answer for an existing doubt."""
        if answer_text is None or not answer_text.strip():
            raise DomainValidationError("Answer text required", field="answer_text")

        if not await self.doubts.exists(doubt_id):
            raise NotFoundError(resource="Doubt", resource_id=doubt_id)
        if await self.users.get_by_id(student_id) is None:
            raise NotFoundError(resource="User", resource_id=student_id)

        practice_answer = await self.practice_answers.create(
            doubt_id=doubt_id,
            student_id=student_id,
            answer_text=answer_text.strip(),
        )

        logger.info(
            "Practice answer submitted",
            practice_id=practice_answer.id,
            doubt_id=doubt_id,
            student_id=student_id,
        )
        return practice_answer

    async def review(
        self,
        practice_id: int,
        professor_id: int,
        action: str,
    ) -> ReviewOutcome:
        """Approve or reject a pending practice answer.

        The status change and any point award commit together. A practice
        answer that is missing or already reviewed raises NotFoundError and
        awards nothing.
        """
        status = parse_review_action(action)

        reviewer = await self.users.get_by_id(professor_id)
        if reviewer is None or reviewer.role != UserRole.PROFESSOR:
            raise DomainValidationError(
                "professor_id must reference a professor", field="professor_id"
            )

        async with transaction(self.session):
            student_id = await self.practice_answers.mark_reviewed(
                practice_id, professor_id, status
            )
            if student_id is None:
                raise NotFoundError(
                    resource="Pending practice answer", resource_id=practice_id
                )

            awarded = 0
            if status == PracticeStatus.APPROVED:
                await self.ledger.award_points(student_id, self.award_points)
                awarded = self.award_points

        logger.info(
            "Practice answer reviewed",
            practice_id=practice_id,
            professor_id=professor_id,
            status=str(status),
            points_awarded=awarded,
        )
        return ReviewOutcome(
            practice_id=practice_id,
            status=status,
            student_id=student_id,
            points_awarded=awarded,
        )

    async def list_pending_for_professor(self, professor_id: int) -> list[RowMapping]:
        """Return pending practice answers on the professor's doubts."""
        return await self.practice_answers.list_pending_for_professor(professor_id)

    async def list_contributions(self, student_id: int) -> Contributions:
        """Return a student's pending and approved practice answers."""
        pending = await self.practice_answers.count_by_status(
            student_id, PracticeStatus.PENDING
        )
        approved = await self.practice_answers.list_approved_for_student(student_id)
        return Contributions(
            pending_count=pending,
            approved_count=len(approved),
            approved_answers=approved,
        )
