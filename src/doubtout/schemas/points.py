"""Pydantic schemas for points and leaderboard endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class PointsResponse(BaseModel):
    """Response model for a user's points."""

    points: int


class LeaderboardEntry(BaseModel):
    """One row of the student leaderboard."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: int = Field(..., validation_alias="id")
    full_name: str
    points: int


class LeaderboardResponse(BaseModel):
    """Response model for the student leaderboard."""

    leaderboard: list[LeaderboardEntry] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    """Response model for a student's dashboard header."""

    model_config = ConfigDict(from_attributes=True)

    full_name: str
    points: int
