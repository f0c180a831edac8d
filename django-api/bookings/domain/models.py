"""Domain models representing persisted venue and booking state.

Django ORM models are in bookings/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from accounts.domain import OrganizationId, UserId
from bookings.domain.value_objects import (
    BLOCKING_STATUSES,
    ApprovalStatus,
    BookingId,
    BookingWindow,
    VenueId,
)
from common.value_objects import Capacity, Money
from events.domain import EventId


@dataclass(frozen=True)
class Venue:
    """Domain representation of a Venue."""

    id: VenueId
    name: str
    location: str
    capacity: Capacity
    amount: Money
    organization_id: OrganizationId


@dataclass(frozen=True)
class VenueBooking:
    """Domain representation of a VenueBooking."""

    id: BookingId
    event_id: EventId
    venue: Venue
    organizer_id: UserId
    organization_id: OrganizationId
    window: BookingWindow
    approval_status: ApprovalStatus
    total_amount_due: Money
    venue_invoice_id: UUID | None
    notes: str
    created_at: datetime
    updated_at: datetime

    @property
    def venue_id(self) -> VenueId:
        return self.venue.id

    @property
    def holds_venue(self) -> bool:
        return self.approval_status in BLOCKING_STATUSES

    def conflicts_with(self, venue_id: VenueId, window: BookingWindow) -> bool:
        return self.holds_venue and self.venue_id == venue_id and self.window.overlaps(window)


@dataclass(frozen=True)
class NewBooking:
    """Validated booking ready to be persisted."""

    event_id: EventId
    venue_id: VenueId
    organizer_id: UserId
    organization_id: OrganizationId
    window: BookingWindow
    total_amount_due: Money
    notes: str = ""
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
