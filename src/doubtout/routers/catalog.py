"""Professor list, subject list and answer archive endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.db import get_db
from doubtout.schemas.catalog import (
    ArchiveEntry,
    ArchiveResponse,
    ProfessorsResponse,
    ProfessorSummary,
    SubjectResponse,
    SubjectsResponse,
)
from doubtout.services.catalog import CatalogService

router = APIRouter(tags=["Catalog"])


@router.get(
    "/professors",
    response_model=ProfessorsResponse,
    summary="List professors",
)
async def list_professors(
    session: AsyncSession = Depends(get_db),
) -> ProfessorsResponse:
    """Return every professor a doubt can be assigned to."""
    professors = await CatalogService(session).professors_list()
    return ProfessorsResponse(
        professors=[ProfessorSummary.model_validate(p) for p in professors]
    )


@router.get(
    "/subjects",
    response_model=SubjectsResponse,
    summary="List subjects for a department semester",
)
async def list_subjects(
    department_id: int = Query(...),
    semester: int = Query(...),
    session: AsyncSession = Depends(get_db),
) -> SubjectsResponse:
    """Return subjects ordered by name."""
    subjects = await CatalogService(session).subjects_list(department_id, semester)
    return SubjectsResponse(
        subjects=[SubjectResponse.model_validate(s) for s in subjects]
    )


@router.get(
    "/archive",
    response_model=ArchiveResponse,
    summary="Search answered doubts",
)
async def search_archive(
    semester: int | None = Query(None),
    course: str | None = Query(None),
    search: str | None = Query(None),
    session: AsyncSession = Depends(get_db),
) -> ArchiveResponse:
    """Return answered doubts matching all of the given filters."""
    rows = await CatalogService(session).archive(
        semester=semester,
        course=course,
        search=search,
    )
    return ArchiveResponse(archive=[ArchiveEntry.model_validate(dict(row)) for row in rows])
