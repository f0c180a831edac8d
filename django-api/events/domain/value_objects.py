"""Domain primitives for events."""

from dataclasses import dataclass
from enum import Enum

from common.value_objects import Identifier


@dataclass(frozen=True)
class EventId(Identifier):
    """Unique identifier for an Event."""


@dataclass(frozen=True)
class TicketTypeId(Identifier):
    """Unique identifier for a TicketType."""


class EventStatus(str, Enum):
    """Lifecycle status of an event."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


ALLOWED_TRANSITIONS: dict[EventStatus, frozenset[EventStatus]] = {
    EventStatus.PENDING: frozenset({EventStatus.APPROVED, EventStatus.REJECTED, EventStatus.CANCELLED}),
    EventStatus.APPROVED: frozenset({EventStatus.REJECTED, EventStatus.CANCELLED}),
    EventStatus.REJECTED: frozenset({EventStatus.APPROVED}),
    EventStatus.CANCELLED: frozenset(),
}
