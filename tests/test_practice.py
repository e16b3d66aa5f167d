"""Integration tests for practice answers and the review workflow."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import make_doubt
from doubtout.config import Settings
from doubtout.exceptions import DomainValidationError, NotFoundError
from doubtout.models.practice_answer import PracticeStatus
from doubtout.repositories.practice_answer import PracticeAnswerRepository
from doubtout.services.points import PointsLedger
from doubtout.services.practice import PracticeReviewService, parse_review_action


@pytest.fixture
async def doubt_id(test_session: AsyncSession, student_id: int) -> int:
    """An open-pool doubt."""
    return await make_doubt(test_session, student_id, "Explain quicksort")


@pytest.fixture
async def practice_id(
    test_session: AsyncSession, doubt_id: int, second_student_id: int
) -> int:
    """A pending practice answer written by the second student."""
    service = PracticeReviewService(test_session)
    practice_answer = await service.submit_practice(
        doubt_id, second_student_id, "Pick a pivot and partition"
    )
    await test_session.commit()
    return practice_answer.id


class TestParseReviewAction:
    """Unit tests for review action parsing."""

    @pytest.mark.parametrize(
        "action, expected",
        [("approved", PracticeStatus.APPROVED), ("rejected", PracticeStatus.REJECTED)],
    )
    def test_valid_actions(self, action: str, expected: PracticeStatus) -> None:
        """Both final statuses are accepted."""
        assert parse_review_action(action) == expected

    @pytest.mark.parametrize("action", ["pending", "maybe", "", None, "APPROVE"])
    def test_invalid_actions(self, action) -> None:
        """Anything else is an invalid action."""
        with pytest.raises(DomainValidationError) as exc_info:
            parse_review_action(action)

        assert exc_info.value.message == "Invalid action"


class TestSubmitPractice:
    """Tests for practice answer submission."""

    async def test_submit_creates_pending(
        self, test_session: AsyncSession, doubt_id: int, second_student_id: int
    ) -> None:
        """New practice answers await review."""
        practice_answer = await PracticeReviewService(test_session).submit_practice(
            doubt_id, second_student_id, "  my attempt  "
        )

        assert practice_answer.id is not None
        assert practice_answer.status == PracticeStatus.PENDING
        assert practice_answer.answer_text == "my attempt"
        assert practice_answer.reviewed_by is None

    async def test_submit_blank_text_rejected(
        self, test_session: AsyncSession, doubt_id: int, second_student_id: int
    ) -> None:
        """Blank practice answers are validation errors."""
        with pytest.raises(DomainValidationError):
            await PracticeReviewService(test_session).submit_practice(
                doubt_id, second_student_id, "   "
            )

    async def test_submit_unknown_doubt(
        self, test_session: AsyncSession, second_student_id: int
    ) -> None:
        """A practice answer needs an existing doubt."""
        with pytest.raises(NotFoundError):
            await PracticeReviewService(test_session).submit_practice(
                999, second_student_id, "text"
            )

    async def test_submit_unknown_student(
        self, test_session: AsyncSession, doubt_id: int
    ) -> None:
        """A practice answer needs an existing author."""
        with pytest.raises(NotFoundError):
            await PracticeReviewService(test_session).submit_practice(
                doubt_id, 999, "text"
            )


class TestReview:
    """Tests for approve and reject transitions."""

    async def test_approve_awards_configured_points(
        self,
        test_session: AsyncSession,
        practice_id: int,
        second_student_id: int,
        professor_id: int,
    ) -> None:
        """Approval sets the status, records the reviewer and awards points."""
        outcome = await PracticeReviewService(test_session).review(
            practice_id, professor_id, "approved"
        )

        assert outcome.status == PracticeStatus.APPROVED
        assert outcome.student_id == second_student_id
        assert outcome.points_awarded == 100

        stored = await PracticeAnswerRepository(test_session).get_by_id(practice_id)
        assert stored.status == PracticeStatus.APPROVED
        assert stored.reviewed_by == professor_id
        assert stored.reviewed_at is not None
        assert await PointsLedger(test_session).get_points(second_student_id) == 100

    async def test_approve_with_custom_award(
        self,
        test_session: AsyncSession,
        practice_id: int,
        second_student_id: int,
        professor_id: int,
    ) -> None:
        """The award amount is configurable per service."""
        await PracticeReviewService(test_session, award_points=25).review(
            practice_id, professor_id, "approved"
        )

        assert await PointsLedger(test_session).get_points(second_student_id) == 25

    def test_non_positive_award_rejected_up_front(self) -> None:
        """A zero award is refused when the service is built, not at approval."""
        with pytest.raises(ValueError):
            PracticeReviewService(MagicMock(), award_points=0)

    def test_award_setting_must_be_positive(self) -> None:
        """The configured award cannot be zero."""
        with pytest.raises(ValidationError):
            Settings(practice_award_points=0)

    async def test_reject_awards_nothing(
        self,
        test_session: AsyncSession,
        practice_id: int,
        second_student_id: int,
        professor_id: int,
    ) -> None:
        """Rejection changes the status only."""
        outcome = await PracticeReviewService(test_session).review(
            practice_id, professor_id, "rejected"
        )

        assert outcome.status == PracticeStatus.REJECTED
        assert outcome.points_awarded == 0
        assert await PointsLedger(test_session).get_points(second_student_id) == 0

    async def test_second_review_does_not_award_twice(
        self,
        test_session: AsyncSession,
        practice_id: int,
        second_student_id: int,
        professor_id: int,
        other_professor_id: int,
    ) -> None:
        """A reviewed practice answer cannot be reviewed again."""
        service = PracticeReviewService(test_session)
        await service.review(practice_id, professor_id, "approved")

        with pytest.raises(NotFoundError):
            await service.review(practice_id, other_professor_id, "approved")

        assert await PointsLedger(test_session).get_points(second_student_id) == 100

    async def test_rejected_cannot_be_approved_later(
        self,
        test_session: AsyncSession,
        practice_id: int,
        second_student_id: int,
        professor_id: int,
    ) -> None:
        """REJECTED is final."""
        service = PracticeReviewService(test_session)
        await service.review(practice_id, professor_id, "rejected")

        with pytest.raises(NotFoundError):
            await service.review(practice_id, professor_id, "approved")

        assert await PointsLedger(test_session).get_points(second_student_id) == 0

    async def test_unknown_practice_answer(
        self, test_session: AsyncSession, professor_id: int
    ) -> None:
        """Reviewing a missing practice answer is not found."""
        with pytest.raises(NotFoundError):
            await PracticeReviewService(test_session).review(
                999, professor_id, "approved"
            )

    async def test_invalid_action_leaves_answer_pending(
        self, test_session: AsyncSession, practice_id: int, professor_id: int
    ) -> None:
        """An invalid action changes nothing."""
        with pytest.raises(DomainValidationError):
            await PracticeReviewService(test_session).review(
                practice_id, professor_id, "maybe"
            )

        stored = await PracticeAnswerRepository(test_session).get_by_id(practice_id)
        assert stored.status == PracticeStatus.PENDING

    async def test_reviewer_must_be_professor(
        self, test_session: AsyncSession, practice_id: int, student_id: int
    ) -> None:
        """Students cannot review practice answers."""
        with pytest.raises(DomainValidationError):
            await PracticeReviewService(test_session).review(
                practice_id, student_id, "approved"
            )

    async def test_failed_award_rolls_back_status(
        self,
        test_session: AsyncSession,
        session_factory,
        practice_id: int,
        professor_id: int,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """If the award fails, the answer stays PENDING."""

        async def fail_award(self, user_id: int, amount: int) -> int:
            raise RuntimeError("store failure")

        monkeypatch.setattr(PointsLedger, "award_points", fail_award)

        with pytest.raises(RuntimeError):
            await PracticeReviewService(test_session).review(
                practice_id, professor_id, "approved"
            )

        async with session_factory() as reader:
            stored = await PracticeAnswerRepository(reader).get_by_id(practice_id)
            assert stored.status == PracticeStatus.PENDING
            assert stored.reviewed_by is None


class TestPracticeViews:
    """Tests for the professor queue and student contributions."""

    async def test_pending_queue_covers_own_and_open_doubts(
        self,
        test_session: AsyncSession,
        student_id: int,
        second_student_id: int,
        professor_id: int,
        other_professor_id: int,
    ) -> None:
        """A professor sees pending answers on assigned and unassigned doubts."""
        service = PracticeReviewService(test_session)
        mine = await make_doubt(
            test_session, student_id, "Mine", assigned_professor_id=professor_id
        )
        pool = await make_doubt(test_session, student_id, "Pool")
        theirs = await make_doubt(
            test_session, student_id, "Theirs", assigned_professor_id=other_professor_id
        )
        first = await service.submit_practice(mine, second_student_id, "A1")
        second = await service.submit_practice(pool, second_student_id, "A2")
        await service.submit_practice(theirs, second_student_id, "A3")
        reviewed = await service.submit_practice(pool, second_student_id, "A4")
        first_id, second_id, reviewed_id = first.id, second.id, reviewed.id
        await test_session.commit()
        await service.review(reviewed_id, professor_id, "rejected")

        rows = await service.list_pending_for_professor(professor_id)

        assert [row["practice_id"] for row in rows] == [first_id, second_id]
        assert rows[0]["student_name"] == "Bharat Menon"
        assert rows[0]["question"] == "Mine"

    async def test_contributions(
        self,
        test_session: AsyncSession,
        doubt_id: int,
        second_student_id: int,
        professor_id: int,
    ) -> None:
        """Contributions count pending answers and list approved ones."""
        service = PracticeReviewService(test_session)
        approved = await service.submit_practice(doubt_id, second_student_id, "good")
        await service.submit_practice(doubt_id, second_student_id, "waiting")
        rejected = await service.submit_practice(doubt_id, second_student_id, "bad")
        approved_id, rejected_id = approved.id, rejected.id
        await test_session.commit()
        await service.review(approved_id, professor_id, "approved")
        await service.review(rejected_id, professor_id, "rejected")

        contributions = await service.list_contributions(second_student_id)

        assert contributions.pending_count == 1
        assert contributions.approved_count == 1
        (entry,) = contributions.approved_answers
        assert entry["practice_id"] == approved_id
        assert entry["answer_text"] == "good"
        assert entry["professor_name"] == "Dr. Iyer"
        assert entry["question"] == "Explain quicksort"

    async def test_contributions_empty(
        self, test_session: AsyncSession, student_id: int
    ) -> None:
        """A student without practice answers has zero tallies."""
        contributions = await PracticeReviewService(test_session).list_contributions(
            student_id
        )

        assert contributions.pending_count == 0
        assert contributions.approved_count == 0
        assert contributions.approved_answers == []
