"""Doubt submission and doubt listing endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.db import get_db
from doubtout.schemas.doubt import (
    DoubtCreateRequest,
    DoubtCreateResponse,
    ProfessorDoubt,
    ProfessorDoubtsResponse,
    StudentQuestion,
    StudentQuestionsResponse,
)
from doubtout.services.doubts import DoubtService

router = APIRouter(tags=["Doubts"])


@router.post(
    "/doubts",
    response_model=DoubtCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Ask a doubt",
)
async def create_doubt(
    request: DoubtCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> DoubtCreateResponse:
    """Store a student's doubt, optionally assigned to a professor."""
    service = DoubtService(session)
    doubt = await service.submit(
        asker_id=request.user_id,
        branch=request.branch,
        semester=request.semester,
        course=request.course,
        question=request.question,
        professor_id=request.professor,
    )
    return DoubtCreateResponse(doubt_id=doubt.id)


@router.get(
    "/student/questions/{user_id}",
    response_model=StudentQuestionsResponse,
    summary="List a student's doubts with answers",
)
async def list_student_questions(
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> StudentQuestionsResponse:
    """Return a student's doubts, most recent first."""
    rows = await DoubtService(session).list_for_student(user_id)
    return StudentQuestionsResponse(
        questions=[StudentQuestion.model_validate(dict(row)) for row in rows]
    )


@router.get(
    "/professor/doubts/{professor_id}",
    response_model=ProfessorDoubtsResponse,
    summary="List a professor's unanswered doubts",
)
async def list_professor_doubts(
    professor_id: int,
    session: AsyncSession = Depends(get_db),
) -> ProfessorDoubtsResponse:
    """Return unanswered doubts assigned to the professor or left unassigned."""
    rows = await DoubtService(session).list_for_professor(professor_id)
    return ProfessorDoubtsResponse(
        doubts=[ProfessorDoubt.model_validate(dict(row)) for row in rows]
    )
