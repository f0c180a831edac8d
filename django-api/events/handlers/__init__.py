from events.handlers.views import (
    EventDetailView,
    EventListView,
    EventTransitionView,
    TicketTypeListView,
)

__all__ = [
    "EventDetailView",
    "EventListView",
    "EventTransitionView",
    "TicketTypeListView",
]
