"""Domain errors raised by the service layer.

Every error is an ``HTTPException`` so services can raise them directly and
FastAPI maps them onto a response. ``detail`` is either a message string or,
for validation failures, a list of field messages.
"""

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError


class AppError(HTTPException):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str | list[str], status_code: int | None = None) -> None:
        super().__init__(status_code=status_code or self.status_code, detail=detail)


class ValidationError(AppError):
    """Field-level validation failed."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str | list[str], status_code: int | None = None) -> None:
        if isinstance(detail, str):
            detail = [detail]
        super().__init__(detail, status_code)

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        return cls(format_error_messages(exc.errors()))


class NotFoundError(AppError):
    """An entity id does not resolve."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Duplicate email or an occupied unit."""

    status_code = status.HTTP_400_BAD_REQUEST


class MalformedReferenceError(AppError):
    """An id is not well formed."""

    status_code = status.HTTP_400_BAD_REQUEST


def format_error_messages(errors) -> list[str]:
    """Flatten pydantic error dicts into ``"field: message"`` strings."""
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        messages.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return messages
