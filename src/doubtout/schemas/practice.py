"""Pydantic schemas for practice session and review endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from doubtout.models.practice_answer import PracticeStatus


class PracticeQuestion(BaseModel):
    """A course doubt offered for practice."""

    doubt_id: int
    question: str
    course: str
    answer_text: str | None = None


class PracticeQuestionsResponse(BaseModel):
    """Response model for practice questions."""

    questions: list[PracticeQuestion] = Field(default_factory=list)


class PracticeAnswerRequest(BaseModel):
    """Request model for submitting a practice answer."""

    doubt_id: int
    student_id: int
    answer_text: str = Field(..., min_length=1)


class PracticeAnswerResponse(BaseModel):
    """Response model for a stored practice answer."""

    message: str = "Submitted for professor review"
    practice_id: int


class PracticeReviewRequest(BaseModel):
    """Request model for approving or rejecting a practice answer."""

    practice_id: int = Field(
        ..., validation_alias=AliasChoices("practice_id", "practice_answer_id")
    )
    professor_id: int
    action: str = Field(..., description="Either 'approved' or 'rejected'")


class PracticeApproveRequest(BaseModel):
    """Request model for the approve-only shortcut."""

    practice_id: int = Field(
        ..., validation_alias=AliasChoices("practice_answer_id", "practice_id")
    )
    professor_id: int


class PendingPractice(BaseModel):
    """A practice answer waiting for a professor's review."""

    practice_id: int
    answer_text: str
    status: PracticeStatus
    created_at: datetime
    doubt_id: int
    question: str
    course: str
    student_name: str


class PendingPracticesResponse(BaseModel):
    """Response model for a professor's review queue."""

    practices: list[PendingPractice] = Field(default_factory=list)


class ApprovedContribution(BaseModel):
    """An approved practice answer with reviewer and question context."""

    practice_id: int
    answer_text: str
    status: PracticeStatus
    reviewed_at: datetime | None = None
    question: str
    course: str
    professor_name: str


class ContributionsResponse(BaseModel):
    """Response model for a student's contribution summary."""

    pending_count: int
    approved_count: int
    approved_answers: list[ApprovedContribution] = Field(default_factory=list)
