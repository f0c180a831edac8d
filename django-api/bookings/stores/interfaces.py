"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import date, time
from uuid import UUID

from accounts.domain import OrganizationId, UserId
from bookings.domain import (
    ApprovalStatus,
    BookingId,
    BookingWindow,
    NewBooking,
    Venue,
    VenueBooking,
    VenueId,
)
from common.value_objects import Money
from events.domain import EventId


@dataclass(frozen=True)
class BookingQuery:
    """Filters for listing bookings. Unset fields do not filter."""

    event_id: EventId | None = None
    venue_id: VenueId | None = None
    organizer_id: UserId | None = None
    organization_id: OrganizationId | None = None
    status: ApprovalStatus | None = None
    starts_on_or_after: date | None = None
    ends_on_or_before: date | None = None
    start_hour_range: tuple[int, int] | None = None
    start_minute_range: tuple[int, int] | None = None
    start_day_range: tuple[int, int] | None = None


@dataclass(frozen=True)
class BookingChanges:
    """Fields to apply to an existing booking. None leaves a field as is."""

    venue_id: VenueId | None = None
    start_date: date | None = None
    end_date: date | None = None
    start_time: time | None = None
    end_time: time | None = None
    notes: str | None = None
    total_amount_due: Money | None = None
    venue_invoice_id: UUID | None = None
    approval_status: ApprovalStatus | None = None


class BookingStore(ABC):
    """Interface for venue and booking persistence operations."""

    @abstractmethod
    def get_venue(self, venue_id: VenueId) -> Venue | None:
        """Return a venue by ID, or None if not found."""
        ...

    @abstractmethod
    def find_venues(self, venue_ids: Iterable[VenueId]) -> list[Venue]:
        """Return the venues that exist among venue_ids."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def reserve_venues(self, venue_ids: Iterable[VenueId]) -> AbstractContextManager[None]:
        """Serialize conflict checks and writes for the given venues.

        Everything inside the block runs in one transaction; leaving it with
        an exception rolls every write back.
        """
        ...

    @abstractmethod
    def bookings_holding_venue(
        self,
        venue_id: VenueId,
        window: BookingWindow,
        exclude: BookingId | None = None,
    ) -> list[VenueBooking]:
        """Return pending/approved bookings of a venue whose days can meet window.

        Overnight bookings reach into the day after their end_date, so the
        candidates include bookings ending the day before the window starts.
        """
        ...

    @abstractmethod
    def create_bookings(self, new_bookings: list[NewBooking]) -> list[VenueBooking]:
        """Persist bookings in order and return them."""
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> VenueBooking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def update_booking(self, booking_id: BookingId, changes: BookingChanges) -> VenueBooking | None:
        """Apply changes; return None if the booking does not exist."""
        ...

    @abstractmethod
    def delete_booking(self, booking_id: BookingId) -> bool:
        """Delete a booking; return False if it did not exist."""
        ...

    @abstractmethod
    def list_bookings(self, query: BookingQuery) -> list[VenueBooking]:
        """Return bookings matching every set filter, earliest first."""
        ...
