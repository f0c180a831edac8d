from django.urls import path

from events.handlers import (
    EventDetailView,
    EventListView,
    EventTransitionView,
    TicketTypeListView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<str:event_id>/approve",
        EventTransitionView.as_view(transition="approve"),
        name="event-approve",
    ),
    path(
        "events/<str:event_id>/reject",
        EventTransitionView.as_view(transition="reject"),
        name="event-reject",
    ),
    path(
        "events/<str:event_id>/cancel",
        EventTransitionView.as_view(transition="cancel"),
        name="event-cancel",
    ),
    path(
        "events/<str:event_id>/ticket-types",
        TicketTypeListView.as_view(),
        name="ticket-type-list",
    ),
]
