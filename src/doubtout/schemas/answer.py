"""Pydantic schemas for answer endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class AnswerCreateRequest(BaseModel):
    """Request model for answering a doubt."""

    doubt_id: int
    answer_text: str = Field(..., min_length=1)
    answered_by: int = Field(..., description="Answering professor ID")


class AnswerCreateResponse(BaseModel):
    """Response model for a stored answer."""

    message: str = "Answer submitted"
    answer_id: int


class AnswerDetailResponse(BaseModel):
    """An answer loaded for editing."""

    answer_text: str
    question: str


class AnswerUpdateRequest(BaseModel):
    """Request model for editing an answer."""

    answer_text: str


class ProfessorAnswer(BaseModel):
    """An answer written by a professor, with question context."""

    answer_id: int
    answer_text: str
    answered_at: datetime
    doubt_id: int
    question: str
    course: str


class ProfessorAnswersResponse(BaseModel):
    """Response model for a professor's answers."""

    answers: list[ProfessorAnswer] = Field(default_factory=list)
