"""Common Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    service: str = Field(..., examples=["doubtout-api"])
    version: str = Field(..., examples=["0.1.0"])


class MessageResponse(BaseModel):
    """Plain acknowledgement of a successful write."""

    message: str = Field(..., description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    request_id: str | None = Field(None, description="Request tracking ID")
