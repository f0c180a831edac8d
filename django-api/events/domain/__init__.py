from events.domain.models import Event, NewEvent, TicketType
from events.domain.value_objects import EventId, EventStatus, TicketTypeId

__all__ = [
    "Event",
    "NewEvent",
    "TicketType",
    "EventId",
    "EventStatus",
    "TicketTypeId",
]
