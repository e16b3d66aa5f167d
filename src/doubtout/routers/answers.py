"""Professor answer endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.db import get_db
from doubtout.schemas.answer import (
    AnswerCreateRequest,
    AnswerCreateResponse,
    AnswerDetailResponse,
    AnswerUpdateRequest,
    ProfessorAnswer,
    ProfessorAnswersResponse,
)
from doubtout.schemas.common import MessageResponse
from doubtout.services.answers import AnswerService

router = APIRouter(tags=["Answers"])


@router.post(
    "/answers",
    response_model=AnswerCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Answer a doubt",
)
async def create_answer(
    request: AnswerCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> AnswerCreateResponse:
    """Store a professor's answer and mark the doubt answered."""
    answer = await AnswerService(session).submit(
        doubt_id=request.doubt_id,
        answer_text=request.answer_text,
        answered_by=request.answered_by,
    )
    return AnswerCreateResponse(answer_id=answer.id)


@router.get(
    "/answers/{answer_id}",
    response_model=AnswerDetailResponse,
    summary="Get an answer for editing",
)
async def get_answer(
    answer_id: int,
    session: AsyncSession = Depends(get_db),
) -> AnswerDetailResponse:
    """Return an answer's text and its question."""
    row = await AnswerService(session).get(answer_id)
    return AnswerDetailResponse.model_validate(dict(row))


@router.put(
    "/answers/{answer_id}",
    response_model=MessageResponse,
    summary="Edit an answer",
)
async def update_answer(
    answer_id: int,
    request: AnswerUpdateRequest,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Overwrite an answer's text."""
    await AnswerService(session).update(answer_id, request.answer_text)
    return MessageResponse(message="Answer updated successfully")


@router.get(
    "/professor/answers/{professor_id}",
    response_model=ProfessorAnswersResponse,
    summary="List a professor's answers",
)
async def list_professor_answers(
    professor_id: int,
    session: AsyncSession = Depends(get_db),
) -> ProfessorAnswersResponse:
    """Return a professor's answers, most recent first."""
    rows = await AnswerService(session).list_by_professor(professor_id)
    return ProfessorAnswersResponse(
        answers=[ProfessorAnswer.model_validate(dict(row)) for row in rows]
    )
