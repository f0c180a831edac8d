from bookings.domain.models import NewBooking, Venue, VenueBooking
from bookings.domain.value_objects import (
    BLOCKING_STATUSES,
    ApprovalStatus,
    BookingId,
    BookingWindow,
    VenueId,
)

__all__ = [
    "NewBooking",
    "Venue",
    "VenueBooking",
    "BLOCKING_STATUSES",
    "ApprovalStatus",
    "BookingId",
    "BookingWindow",
    "VenueId",
]
