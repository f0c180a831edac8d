"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses (common.http.exception_handler)
- Never contain business logic
- Never expose internal error details
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.identity import identity_from_request
from accounts.stores import DjangoDirectoryStore
from common.http import success_response
from events.cache import EVENT_LIST_KEY, cache_timeout, event_detail_key
from events.handlers.serializers import EventSerializer, TicketTypeSerializer
from events.services import EventService
from events.stores import DjangoEventStore


def get_event_service() -> EventService:
    return EventService(DjangoEventStore(), DjangoDirectoryStore())


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        data = cache.get(EVENT_LIST_KEY)
        if data is None:
            events = get_event_service().list_events()
            data = EventSerializer(events, many=True).data
            cache.set(EVENT_LIST_KEY, data, cache_timeout())
        return success_response("Events retrieved successfully", data)

    def post(self, request: Request) -> Response:
        event = get_event_service().create_event(request.data, identity_from_request(request))
        return success_response(
            "Event created successfully",
            EventSerializer(event).data,
            status.HTTP_201_CREATED,
        )


class EventDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        key = event_detail_key(event_id)
        data = cache.get(key)
        if data is None:
            event = get_event_service().get_event(event_id)
            data = EventSerializer(event).data
            cache.set(key, data, cache_timeout())
        return success_response("Event retrieved successfully", data)

    def put(self, request: Request, event_id: str) -> Response:
        event = get_event_service().update_event(event_id, request.data)
        return success_response("Event updated successfully", EventSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        get_event_service().delete_event(event_id)
        return success_response("Event deleted successfully")


class EventTransitionView(APIView):
    """Handler for POST /api/events/{event_id}/{approve,reject,cancel}"""

    transition: str = ""

    def post(self, request: Request, event_id: str) -> Response:
        service = get_event_service()
        handlers = {
            "approve": service.approve_event,
            "reject": service.reject_event,
            "cancel": service.cancel_event,
        }
        event = handlers[self.transition](event_id)
        return success_response(
            f"Event status changed to {event.status.value}", EventSerializer(event).data
        )


class TicketTypeListView(APIView):
    """Handler for GET/POST /api/events/{event_id}/ticket-types"""

    def get(self, request: Request, event_id: str) -> Response:
        ticket_types = get_event_service().list_ticket_types(event_id)
        return success_response(
            "Ticket types retrieved successfully",
            TicketTypeSerializer(ticket_types, many=True).data,
        )

    def post(self, request: Request, event_id: str) -> Response:
        ticket_type = get_event_service().create_ticket_type(event_id, request.data)
        return success_response(
            "Ticket type created successfully",
            TicketTypeSerializer(ticket_type).data,
            status.HTTP_201_CREATED,
        )
