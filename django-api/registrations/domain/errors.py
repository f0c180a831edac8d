"""Domain errors for registrations."""

from common.errors import DomainError, ErrorCode, NotFoundError


class DuplicateRegistrationError(DomainError):
    """Raised when a participant already holds a registration for the event."""

    def __init__(self, user_ids: list[str]) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REGISTRATION,
            message="One or more participants are already registered for this event",
            details={"userIds": sorted(user_ids)},
        )
        self.user_ids = tuple(user_ids)


class MissingRelatedEntityError(DomainError):
    """Raised when a referenced row is gone at the time of the write."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            code=ErrorCode.MISSING_RELATED_ENTITY,
            message=f"Related {entity} does not exist",
            details={"entity": entity},
        )
        self.entity = entity


class InvalidCredentialError(DomainError):
    """Raised when a presented credential cannot be trusted."""

    def __init__(self, message: str = "Invalid or expired QR code") -> None:
        super().__init__(code=ErrorCode.INVALID_CREDENTIAL, message=message)


class AlreadyCheckedInError(DomainError):
    """Raised when checking in a registration that already attended."""

    def __init__(self, registration_id: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_CHECKED_IN,
            message="Registration has already been checked in",
        )
        self.registration_id = registration_id


class RegistrationNotFoundError(NotFoundError):
    """Raised when a registration is not found."""

    def __init__(self, registration_id: str) -> None:
        super().__init__(entity="Registration", entity_id=registration_id)
