"""Domain error codes shared by every app.

App-specific errors live in each app's domain/errors.py and subclass
DomainError from here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Domain error codes."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    FORBIDDEN = "FORBIDDEN"
    ORGANIZATION_NOT_FOUND = "ORGANIZATION_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_VALUE = "INVALID_VALUE"
    INVALID_DATE = "INVALID_DATE"
    INVALID_RANGE = "INVALID_RANGE"
    SCHEDULING_CONFLICT = "SCHEDULING_CONFLICT"
    INVALID_STATUS = "INVALID_STATUS"
    VENUES_NOT_FOUND = "VENUES_NOT_FOUND"
    DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"
    MISSING_RELATED_ENTITY = "MISSING_RELATED_ENTITY"
    INVALID_CREDENTIAL = "INVALID_CREDENTIAL"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    NOT_FOUND = "NOT_FOUND"
    STORE_FAILURE = "STORE_FAILURE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnauthenticatedError(DomainError):
    """Raised when the caller identity is missing or incomplete."""

    def __init__(self, message: str = "User is not properly authenticated") -> None:
        super().__init__(code=ErrorCode.UNAUTHENTICATED, message=message)


class InvalidIdentifierError(DomainError):
    """Raised when an identifier is not a version-4 UUID."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_IDENTIFIER,
            message=f"{field_name} is not a valid UUID",
            details={"field": field_name},
        )
        self.field_name = field_name


class ForbiddenError(DomainError):
    """Raised when the caller may not act for the requested organization."""

    def __init__(self, message: str = "User is not part of the specified organization") -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)


class MissingFieldsError(DomainError):
    """Raised when required request fields are absent."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            code=ErrorCode.MISSING_FIELDS,
            message="Missing required fields",
            details={"fields": list(fields)},
        )
        self.fields = tuple(fields)


class NotFoundError(DomainError):
    """Raised when an entity does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"{entity} not found",
        )
        self.entity = entity
        self.entity_id = entity_id


class StoreFailureError(DomainError):
    """Raised when the underlying store fails."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_FAILURE,
            message="The operation could not be completed",
        )
        self.operation = operation


class InvalidDateError(DomainError):
    """Raised when a date or time value cannot be parsed."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_DATE,
            message=f"Invalid {field_name} format",
            details={"field": field_name},
        )
        self.field_name = field_name


class InvalidRangeError(DomainError):
    """Raised when a start date falls after its end date."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RANGE,
            message="Start date cannot be after end date",
        )


class InvalidStatusError(DomainError):
    """Raised when a status value is outside its enumeration or transition."""

    def __init__(self, value: object, allowed: list[str]) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS,
            message="Invalid status provided",
            details={"allowed": list(allowed)},
        )
        self.value = value


class InvalidValueError(DomainError):
    """Raised when a field is present but its value is unusable."""

    def __init__(self, field_name: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_VALUE,
            message=f"Invalid {field_name}: {reason}",
            details={"field": field_name},
        )
        self.field_name = field_name
