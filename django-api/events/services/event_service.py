"""Event service - all business logic for the event lifecycle lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from accounts.identity import Identity
from accounts.services import authorize_member
from accounts.stores.interfaces import DirectoryStore
from common.dates import parse_request_date
from common.errors import (
    InvalidRangeError,
    InvalidStatusError,
    InvalidValueError,
    MissingFieldsError,
)
from common.value_objects import Capacity, Money, parse_identifier
from events.domain import Event, EventId, EventStatus, NewEvent, TicketType
from events.domain.errors import EventNotFoundError
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "startDate", "endDate")


class EventService:
    """Service for event lifecycle operations."""

    def __init__(self, store: EventStore, directory: DirectoryStore) -> None:
        self._store = store
        self._directory = directory

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidIdentifierError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(self._parse_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def create_event(self, data: Mapping[str, Any], identity: Identity) -> Event:
        """Create an event in pending status, organized by the caller."""
        organization_id, member = authorize_member(identity, self._directory)

        name = str(data.get("name") or "").strip()
        if not name:
            raise MissingFieldsError(["name"])

        start_date = end_date = None
        if data.get("startDate"):
            start_date = parse_request_date(data["startDate"], "startDate")
        if data.get("endDate"):
            end_date = parse_request_date(data["endDate"], "endDate")
        if start_date and end_date and start_date > end_date:
            raise InvalidRangeError()

        event = self._store.create_event(
            NewEvent(
                name=name,
                description=data.get("description") or "",
                organizer_id=member.id,
                organization_id=organization_id,
                start_date=start_date,
                end_date=end_date,
            )
        )
        logger.info("Event %s created by %s", event.id, member.id)
        return event

    def update_event(self, event_id: str, data: Mapping[str, Any]) -> Event:
        """Edit an event; any edit sends it back for approval."""
        existing = self.get_event(event_id)
        if not any(key in data for key in EDITABLE_FIELDS):
            raise MissingFieldsError(list(EDITABLE_FIELDS))

        start_date = existing.start_date
        end_date = existing.end_date
        if data.get("startDate"):
            start_date = parse_request_date(data["startDate"], "startDate")
        if data.get("endDate"):
            end_date = parse_request_date(data["endDate"], "endDate")
        if start_date and end_date and start_date > end_date:
            raise InvalidRangeError()

        name = data.get("name")
        if name is not None and not str(name).strip():
            raise InvalidValueError("name", "must not be blank")

        updated = self._store.update_event(
            existing.id,
            name=str(name).strip() if name is not None else None,
            description=data.get("description"),
            start_date=start_date,
            end_date=end_date,
            status=EventStatus.PENDING,
        )
        if updated is None:
            raise EventNotFoundError(event_id)
        logger.info("Event %s updated and reset to pending", updated.id)
        return updated

    def approve_event(self, event_id: str) -> Event:
        return self._transition(event_id, EventStatus.APPROVED)

    def reject_event(self, event_id: str) -> Event:
        return self._transition(event_id, EventStatus.REJECTED)

    def cancel_event(self, event_id: str) -> Event:
        return self._transition(event_id, EventStatus.CANCELLED)

    def delete_event(self, event_id: str) -> None:
        if not self._store.delete_event(self._parse_id(event_id)):
            raise EventNotFoundError(event_id)
        logger.info("Event %s deleted", event_id)

    def list_ticket_types(self, event_id: str) -> list[TicketType]:
        parsed = self._parse_id(event_id)
        if not self._store.event_exists(parsed):
            raise EventNotFoundError(event_id)
        return self._store.list_ticket_types(parsed)

    def create_ticket_type(self, event_id: str, data: Mapping[str, Any]) -> TicketType:
        parsed = self._parse_id(event_id)
        missing = [key for key in ("name", "price", "quantity") if data.get(key) in (None, "")]
        if missing:
            raise MissingFieldsError(missing)
        if not self._store.event_exists(parsed):
            raise EventNotFoundError(event_id)

        try:
            price = Money(Decimal(str(data["price"])))
        except (InvalidOperation, ValueError):
            raise InvalidValueError("price", "must be a non-negative amount") from None
        try:
            quantity = Capacity(int(data["quantity"]))
        except (TypeError, ValueError):
            raise InvalidValueError("quantity", "must be a non-negative integer") from None

        return self._store.create_ticket_type(
            parsed, str(data["name"]).strip(), price.amount, quantity.value
        )

    def _transition(self, event_id: str, status: EventStatus) -> Event:
        event = self.get_event(event_id)
        if not event.can_transition_to(status):
            raise InvalidStatusError(
                status.value, [allowed.value for allowed in EventStatus if event.can_transition_to(allowed)]
            )
        updated = self._store.update_event(event.id, status=status)
        if updated is None:
            raise EventNotFoundError(event_id)
        logger.info("Event %s moved from %s to %s", event.id, event.status.value, status.value)
        return updated

    @staticmethod
    def _parse_id(event_id: str) -> EventId:
        return parse_identifier(EventId, event_id, "eventId")
