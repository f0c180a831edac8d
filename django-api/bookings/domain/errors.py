"""Domain errors for venue bookings."""

from common.errors import DomainError, ErrorCode, NotFoundError


class SchedulingConflictError(DomainError):
    """Raised when a venue is already held for an overlapping window."""

    def __init__(self, conflicting_booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.SCHEDULING_CONFLICT,
            message="Venue is already booked for the requested dates and times",
            details={"conflictingBookingId": conflicting_booking_id},
        )
        self.conflicting_booking_id = conflicting_booking_id


class VenuesNotFoundError(DomainError):
    """Raised when a bulk request references venues that do not exist."""

    def __init__(self, missing_venue_ids: list[str]) -> None:
        super().__init__(
            code=ErrorCode.VENUES_NOT_FOUND,
            message="One or more venues not found",
            details={"venueIds": sorted(missing_venue_ids)},
        )
        self.missing_venue_ids = tuple(missing_venue_ids)


class BookingNotFoundError(NotFoundError):
    """Raised when a venue booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(entity="Venue booking", entity_id=booking_id)


class VenueNotFoundError(NotFoundError):
    """Raised when a venue is not found."""

    def __init__(self, venue_id: str) -> None:
        super().__init__(entity="Venue", entity_id=venue_id)
