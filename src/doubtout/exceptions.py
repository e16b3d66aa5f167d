"""Domain errors raised by services and mapped to HTTP responses."""

from typing import Any


class DoubtOutError(Exception):
    """Root of every error the API reports with a JSON ``error`` body."""

    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(DoubtOutError):
    """A referenced user, doubt, answer or practice answer does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, resource_id: Any) -> None:
        super().__init__(
            message=f"{resource} not found",
            details={"resource": resource, "resource_id": str(resource_id)},
        )


class DomainValidationError(DoubtOutError):
    """A required field is missing, blank or out of range."""

    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if field:
            details = {"field": field, **(details or {})}
        super().__init__(message=message, details=details)


class UnauthorizedError(DoubtOutError):
    """Credentials or token were rejected."""

    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message=message)


class ForbiddenError(DoubtOutError):
    """Caller is not allowed to perform the action."""

    error_code = "FORBIDDEN"


class ConflictError(DoubtOutError):
    """Write collides with existing state."""

    error_code = "CONFLICT"


class DuplicateEmailError(ConflictError):
    """A user with this email already exists."""

    error_code = "DUPLICATE_EMAIL"

    def __init__(self, email: str) -> None:
        super().__init__(message=f"Email {email} is already registered")


class DuplicateAnswerError(ConflictError):
    """The doubt already has an answer."""

    error_code = "DUPLICATE_ANSWER"

    def __init__(self, doubt_id: int) -> None:
        super().__init__(
            message="Doubt has already been answered",
            details={"doubt_id": doubt_id},
        )
