"""Django ORM implementation of the EventStore."""

from datetime import date
from decimal import Decimal

from django.db import DatabaseError

from accounts.domain import OrganizationId, UserId
from common.errors import StoreFailureError
from common.value_objects import Capacity, Money
from events import models
from events.domain import Event, EventId, EventStatus, NewEvent, TicketType, TicketTypeId
from events.stores.interfaces import EventStore


def to_ticket_type(row: models.TicketType) -> TicketType:
    return TicketType(
        id=TicketTypeId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        price=Money(row.price),
        quantity=Capacity(row.quantity),
        created_at=row.created_at,
    )


def to_event(row: models.Event, ticket_types: tuple[TicketType, ...] = ()) -> Event:
    return Event(
        id=EventId(row.id),
        name=row.name,
        description=row.description,
        status=EventStatus(row.status),
        organizer_id=UserId(row.organizer_id),
        organization_id=OrganizationId(row.organization_id),
        start_date=row.start_date,
        end_date=row.end_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
        ticket_types=ticket_types,
    )


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def list_events(self) -> list[Event]:
        try:
            rows = models.Event.objects.prefetch_related("ticket_types").all()
            return [
                to_event(row, tuple(to_ticket_type(t) for t in row.ticket_types.all()))
                for row in rows
            ]
        except DatabaseError as exc:
            raise StoreFailureError("list_events") from exc

    def get_event(self, event_id: EventId) -> Event | None:
        try:
            row = (
                models.Event.objects.prefetch_related("ticket_types")
                .filter(pk=event_id.value)
                .first()
            )
            if row is None:
                return None
            return to_event(row, tuple(to_ticket_type(t) for t in row.ticket_types.all()))
        except DatabaseError as exc:
            raise StoreFailureError("get_event") from exc

    def event_exists(self, event_id: EventId) -> bool:
        try:
            return models.Event.objects.filter(pk=event_id.value).exists()
        except DatabaseError as exc:
            raise StoreFailureError("event_exists") from exc

    def create_event(self, new_event: NewEvent) -> Event:
        try:
            row = models.Event.objects.create(
                name=new_event.name,
                description=new_event.description,
                status=EventStatus.PENDING.value,
                organizer_id=new_event.organizer_id.value,
                organization_id=new_event.organization_id.value,
                start_date=new_event.start_date,
                end_date=new_event.end_date,
            )
        except DatabaseError as exc:
            raise StoreFailureError("create_event") from exc
        return to_event(row)

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
        try:
            row = models.Event.objects.filter(pk=event_id.value).first()
            if row is None:
                return None
            if name is not None:
                row.name = name
            if description is not None:
                row.description = description
            if start_date is not None:
                row.start_date = start_date
            if end_date is not None:
                row.end_date = end_date
            if status is not None:
                row.status = status.value
            row.save()
        except DatabaseError as exc:
            raise StoreFailureError("update_event") from exc
        return self.get_event(event_id)

    def delete_event(self, event_id: EventId) -> bool:
        try:
            deleted, _ = models.Event.objects.filter(pk=event_id.value).delete()
        except DatabaseError as exc:
            raise StoreFailureError("delete_event") from exc
        return deleted > 0

    def list_ticket_types(self, event_id: EventId) -> list[TicketType]:
        try:
            rows = models.TicketType.objects.filter(event_id=event_id.value)
            return [to_ticket_type(row) for row in rows]
        except DatabaseError as exc:
            raise StoreFailureError("list_ticket_types") from exc

    def create_ticket_type(
        self, event_id: EventId, name: str, price: Decimal, quantity: int
    ) -> TicketType:
        try:
            row = models.TicketType.objects.create(
                event_id=event_id.value, name=name, price=price, quantity=quantity
            )
        except DatabaseError as exc:
            raise StoreFailureError("create_ticket_type") from exc
        return to_ticket_type(row)
