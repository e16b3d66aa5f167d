"""Pydantic schemas for DoubtOut API."""

from doubtout.schemas.common import ErrorResponse, HealthResponse, MessageResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
