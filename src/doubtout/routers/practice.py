"""Practice session and practice review endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.db import get_db
from doubtout.models.practice_answer import PracticeStatus
from doubtout.schemas.common import MessageResponse
from doubtout.schemas.practice import (
    ApprovedContribution,
    ContributionsResponse,
    PendingPractice,
    PendingPracticesResponse,
    PracticeAnswerRequest,
    PracticeAnswerResponse,
    PracticeApproveRequest,
    PracticeQuestion,
    PracticeQuestionsResponse,
    PracticeReviewRequest,
)
from doubtout.services.catalog import CatalogService
from doubtout.services.practice import PracticeReviewService

router = APIRouter(tags=["Practice"])


@router.get(
    "/practice/questions",
    response_model=PracticeQuestionsResponse,
    summary="List practice questions for a course",
)
async def list_practice_questions(
    course: str = Query(..., min_length=1),
    status: str | None = Query(None, description="answered or unanswered"),
    session: AsyncSession = Depends(get_db),
) -> PracticeQuestionsResponse:
    """Return a course's doubts, optionally filtered by answer presence."""
    # An empty select option arrives as status=
    rows = await CatalogService(session).practice_questions(course, status or None)
    return PracticeQuestionsResponse(
        questions=[PracticeQuestion.model_validate(dict(row)) for row in rows]
    )


@router.post(
    "/practice/answer",
    response_model=PracticeAnswerResponse,
    summary="Submit a practice answer for review",
)
async def submit_practice_answer(
    request: PracticeAnswerRequest,
    session: AsyncSession = Depends(get_db),
) -> PracticeAnswerResponse:
    """Store a student's answer to a doubt as pending review."""
    practice_answer = await PracticeReviewService(session).submit_practice(
        doubt_id=request.doubt_id,
        student_id=request.student_id,
        answer_text=request.answer_text,
    )
    return PracticeAnswerResponse(practice_id=practice_answer.id)


@router.post(
    "/professor/practice/review",
    response_model=MessageResponse,
    summary="Approve or reject a practice answer",
)
async def review_practice_answer(
    request: PracticeReviewRequest,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Review a pending practice answer; approval awards points."""
    outcome = await PracticeReviewService(session).review(
        practice_id=request.practice_id,
        professor_id=request.professor_id,
        action=request.action,
    )
    return MessageResponse(message=f"Answer {outcome.status} successfully")


@router.post(
    "/practice/approve",
    response_model=MessageResponse,
    summary="Approve a practice answer",
)
async def approve_practice_answer(
    request: PracticeApproveRequest,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Approve a pending practice answer and award points."""
    await PracticeReviewService(session).review(
        practice_id=request.practice_id,
        professor_id=request.professor_id,
        action=PracticeStatus.APPROVED,
    )
    return MessageResponse(message="Answer approved and points awarded")


@router.get(
    "/professor/practice/{professor_id}",
    response_model=PendingPracticesResponse,
    summary="List practice answers awaiting a professor's review",
)
async def list_pending_practice(
    professor_id: int,
    session: AsyncSession = Depends(get_db),
) -> PendingPracticesResponse:
    """Return pending practice answers on the professor's doubts."""
    rows = await PracticeReviewService(session).list_pending_for_professor(
        professor_id
    )
    return PendingPracticesResponse(
        practices=[PendingPractice.model_validate(dict(row)) for row in rows]
    )


@router.get(
    "/student/contributions/{student_id}",
    response_model=ContributionsResponse,
    summary="Summarize a student's practice contributions",
)
async def get_contributions(
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> ContributionsResponse:
    """Return pending/approved counts and the approved answers."""
    contributions = await PracticeReviewService(session).list_contributions(
        student_id
    )
    return ContributionsResponse(
        pending_count=contributions.pending_count,
        approved_count=contributions.approved_count,
        approved_answers=[
            ApprovedContribution.model_validate(dict(row))
            for row in contributions.approved_answers
        ],
    )
