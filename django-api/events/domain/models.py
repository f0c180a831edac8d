"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import date, datetime

from accounts.domain import OrganizationId, UserId
from common.value_objects import Capacity, Money
from events.domain.value_objects import ALLOWED_TRANSITIONS, EventId, EventStatus, TicketTypeId


@dataclass(frozen=True)
class TicketType:
    """Domain representation of a TicketType."""

    id: TicketTypeId
    event_id: EventId
    name: str
    price: Money
    quantity: Capacity
    created_at: datetime


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    description: str
    status: EventStatus
    organizer_id: UserId
    organization_id: OrganizationId
    start_date: date | None
    end_date: date | None
    created_at: datetime
    updated_at: datetime
    ticket_types: tuple[TicketType, ...] = ()

    def can_transition_to(self, status: EventStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]


@dataclass(frozen=True)
class NewEvent:
    """Validated input for creating an event."""

    name: str
    description: str
    organizer_id: UserId
    organization_id: OrganizationId
    start_date: date | None = None
    end_date: date | None = None
