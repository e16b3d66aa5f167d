"""Pydantic schemas for signup and login endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from doubtout.models.user import UserRole


class SignupRequest(BaseModel):
    """Request model for creating an account."""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., alias="fullName", min_length=1, max_length=255)
    role: UserRole
    # Accepted for compatibility but not persisted
    role_details: dict[str, Any] = Field(..., alias="roleDetails")


class SignupResponse(BaseModel):
    """Response model for a newly registered user."""

    message: str = "User successfully registered."
    user_id: int = Field(..., description="New user ID")
    email: str
    role: UserRole


class LoginRequest(BaseModel):
    """Request model for logging in as a given role."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: UserRole


class LoginUser(BaseModel):
    """Public view of the logged-in user."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: int = Field(..., validation_alias="id")
    full_name: str = Field(..., serialization_alias="fullName")
    role: UserRole


class LoginResponse(BaseModel):
    """Response model for a successful login."""

    message: str = "Login successful"
    token: str = Field(..., description="Signed bearer access token")
    user: LoginUser


class CurrentUserResponse(BaseModel):
    """Response model for the user behind a bearer token."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: int = Field(..., validation_alias="id")
    email: str
    full_name: str
    role: UserRole
    points: int
