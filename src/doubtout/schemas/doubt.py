"""Pydantic schemas for doubt endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from doubtout.models.doubt import DoubtStatus


class DoubtCreateRequest(BaseModel):
    """Request model for posting a new doubt."""

    user_id: int = Field(..., description="Asking student ID")
    branch: str = Field(..., min_length=1)
    semester: int = Field(..., ge=1)
    course: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    professor: int | None = Field(
        None, description="Assigned professor ID; omitted means open pool"
    )

    @field_validator("professor", mode="before")
    @classmethod
    def normalize_professor(cls, v: Any) -> Any:
        """Treat empty and "null" values as no assignment."""
        if v is None or v == 0:
            return None
        if isinstance(v, str) and v.strip().lower() in ("", "null", "none"):
            return None
        return v


class DoubtCreateResponse(BaseModel):
    """Response model for a stored doubt."""

    message: str = "Doubt submitted"
    doubt_id: int


class StudentQuestion(BaseModel):
    """A doubt from a student's history with its answer, if any."""

    question_id: int
    question: str
    course: str
    status: DoubtStatus
    created_at: datetime
    answer_text: str | None = None
    answered_at: datetime | None = None
    answered_by_name: str | None = None


class StudentQuestionsResponse(BaseModel):
    """Response model for a student's question history."""

    questions: list[StudentQuestion] = Field(default_factory=list)


class ProfessorDoubt(BaseModel):
    """An unanswered doubt in a professor's inbox."""

    doubt_id: int
    question: str
    course: str
    semester: int
    branch: str
    assigned_professor_id: int | None = None
    created_at: datetime
    student_name: str


class ProfessorDoubtsResponse(BaseModel):
    """Response model for a professor's inbox."""

    doubts: list[ProfessorDoubt] = Field(default_factory=list)
