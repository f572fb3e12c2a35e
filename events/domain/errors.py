"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SLUG_TAKEN = "SLUG_TAKEN"
    BOOKING_EXISTS = "BOOKING_EXISTS"
    EVENT_REFERENCE_MISSING = "EVENT_REFERENCE_MISSING"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"


class InvalidFormatError(ValueError):
    """Raised by the normalizers when a value cannot be put in canonical form."""


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation message."""

    field: str
    message: str


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


@dataclass(frozen=True)
class ValidationError(DomainError):
    """Raised when input is missing, malformed or out of range."""

    errors: tuple[FieldError, ...] = ()

    @classmethod
    def for_fields(cls, errors: list[FieldError]) -> "ValidationError":
        summary = "; ".join(f"{error.field}: {error.message}" for error in errors)
        return cls(
            code=ErrorCode.VALIDATION_FAILED,
            message=summary or "Invalid input",
            errors=tuple(errors),
        )

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls.for_fields([FieldError(field=field, message=message)])

    def as_dict(self) -> dict[str, str]:
        return {error.field: error.message for error in self.errors}


class UniquenessError(DomainError):
    """Raised when a record would collide with an existing unique value."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SLUG_TAKEN) -> None:
        super().__init__(code=code, message=message)


class EventReferenceError(DomainError):
    """Raised when a booking references an event that does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_REFERENCE_MISSING,
            message=f"Event with ID {event_id} does not exist",
        )


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f'Event with slug "{slug}" not found',
        )


class ConnectivityError(DomainError):
    """Raised when the data store is unreachable or misconfigured."""

    def __init__(self, message: str = "Database connection failed") -> None:
        super().__init__(code=ErrorCode.STORE_UNAVAILABLE, message=message)


class ImageUploadError(DomainError):
    """Raised when the image store rejects or fails an upload."""

    def __init__(self, message: str = "Image upload failed") -> None:
        super().__init__(code=ErrorCode.IMAGE_UPLOAD_FAILED, message=message)
