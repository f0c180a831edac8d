"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from events.domain import Event, EventId, EventStatus, NewEvent, TicketType


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event with its ticket types, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def create_event(self, new_event: NewEvent) -> Event:
        """Persist a new event in pending status."""
        ...

    @abstractmethod
    def update_event(
        self,
        event_id: EventId,
        *,
        name: str | None = None,
        description: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        status: EventStatus | None = None,
    ) -> Event | None:
        """Apply the given fields; return None if the event does not exist."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> bool:
        """Delete an event; return False if it did not exist."""
        ...

    @abstractmethod
    def list_ticket_types(self, event_id: EventId) -> list[TicketType]:
        """Return the ticket types of an event, oldest first."""
        ...

    @abstractmethod
    def create_ticket_type(
        self, event_id: EventId, name: str, price: Decimal, quantity: int
    ) -> TicketType:
        """Persist a ticket type for an existing event."""
        ...
