"""Pydantic schemas for read-only catalog endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ProfessorSummary(BaseModel):
    """A professor students can assign doubts to."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: int = Field(..., validation_alias="id")
    full_name: str


class ProfessorsResponse(BaseModel):
    """Response model for the professor list."""

    professors: list[ProfessorSummary] = Field(default_factory=list)


class SubjectResponse(BaseModel):
    """A subject offered in a department semester."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    subject_id: int = Field(..., validation_alias="id")
    department_id: int
    semester: int
    subject_name: str


class SubjectsResponse(BaseModel):
    """Response model for the subject list."""

    subjects: list[SubjectResponse] = Field(default_factory=list)


class ArchiveEntry(BaseModel):
    """An answered doubt in the searchable archive."""

    doubt_id: int
    question: str
    course: str
    semester: int
    answer_text: str
    answered_by: str


class ArchiveResponse(BaseModel):
    """Response model for archive search."""

    archive: list[ArchiveEntry] = Field(default_factory=list)
