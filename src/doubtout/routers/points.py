"""Points, leaderboard and dashboard endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.db import get_db
from doubtout.schemas.points import (
    DashboardResponse,
    LeaderboardEntry,
    LeaderboardResponse,
    PointsResponse,
)
from doubtout.services.points import PointsLedger

router = APIRouter(tags=["Points"])


@router.get(
    "/users/{user_id}/points",
    response_model=PointsResponse,
    summary="Get a user's points",
)
async def get_points(
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> PointsResponse:
    """Return a user's current points."""
    points = await PointsLedger(session).get_points(user_id)
    return PointsResponse(points=points)


@router.get(
    "/leaderboard",
    response_model=LeaderboardResponse,
    summary="Get the top students",
)
async def get_leaderboard(
    session: AsyncSession = Depends(get_db),
) -> LeaderboardResponse:
    """Return the highest scoring students."""
    students = await PointsLedger(session).leaderboard()
    return LeaderboardResponse(
        leaderboard=[LeaderboardEntry.model_validate(s) for s in students]
    )


@router.get(
    "/student/dashboard/{student_id}",
    response_model=DashboardResponse,
    summary="Get a student's dashboard header",
)
async def get_dashboard(
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> DashboardResponse:
    """Return a student's name and points."""
    student = await PointsLedger(session).dashboard(student_id)
    return DashboardResponse.model_validate(student)
