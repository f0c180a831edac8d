"""HTTP handlers (views) for venue bookings.

Handlers parse the request, call BookingService and serialize the result.
Domain errors are mapped to responses by common.http.exception_handler.
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.identity import identity_from_request
from accounts.stores import DjangoDirectoryStore
from bookings.handlers.serializers import BookingSerializer
from bookings.services import BookingService
from bookings.stores import DjangoBookingStore
from common.http import success_response


def get_booking_service() -> BookingService:
    return BookingService(DjangoBookingStore(), DjangoDirectoryStore())


def bookings_response(bookings, message: str = "Bookings retrieved successfully") -> Response:
    return success_response(message, BookingSerializer(bookings, many=True).data)


class BookingListView(APIView):
    """Handler for GET/POST /api/bookings"""

    def get(self, request: Request) -> Response:
        return bookings_response(get_booking_service().list_bookings())

    def post(self, request: Request) -> Response:
        booking = get_booking_service().submit_booking(
            request.data, identity_from_request(request)
        )
        return success_response(
            "Venue booking created successfully",
            BookingSerializer(booking).data,
            status.HTTP_201_CREATED,
        )


class BookingDateRangeView(APIView):
    """Handler for GET /api/bookings/date-range"""

    def get(self, request: Request) -> Response:
        return bookings_response(get_booking_service().list_by_date_range(request.query_params))


class OrganizerBookingsView(APIView):
    """Handler for GET /api/bookings/organizer"""

    def get(self, request: Request) -> Response:
        return bookings_response(
            get_booking_service().list_for_organizer(identity_from_request(request))
        )


class BookingsByStatusView(APIView):
    """Handler for GET /api/bookings/status/{status}"""

    def get(self, request: Request, approval_status: str) -> Response:
        return bookings_response(get_booking_service().list_by_status(approval_status))


class BookingDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/bookings/{booking_id}"""

    def get(self, request: Request, booking_id: str) -> Response:
        booking = get_booking_service().get_booking(booking_id)
        return success_response("Venue booking retrieved successfully", BookingSerializer(booking).data)

    def put(self, request: Request, booking_id: str) -> Response:
        booking = get_booking_service().update_booking(booking_id, request.data)
        return success_response("Venue booking updated successfully", BookingSerializer(booking).data)

    def delete(self, request: Request, booking_id: str) -> Response:
        get_booking_service().delete_booking(booking_id)
        return success_response("Venue booking deleted successfully")


class BookingStatusView(APIView):
    """Handler for PATCH /api/bookings/{booking_id}/status"""

    def patch(self, request: Request, booking_id: str) -> Response:
        booking = get_booking_service().update_booking_status(
            booking_id, request.data.get("approvalStatus")
        )
        return success_response(
            f"Venue booking status updated to {booking.approval_status.value}",
            BookingSerializer(booking).data,
        )


class EventBookingsView(APIView):
    """Handler for GET /api/events/{event_id}/bookings"""

    def get(self, request: Request, event_id: str) -> Response:
        return bookings_response(get_booking_service().list_for_event(event_id))


class BulkBookingView(APIView):
    """Handler for POST /api/events/{event_id}/bookings/bulk"""

    def post(self, request: Request, event_id: str) -> Response:
        bookings = get_booking_service().bulk_create_venue_bookings(
            event_id, request.data, identity_from_request(request)
        )
        return success_response(
            f"{len(bookings)} venue bookings created successfully",
            BookingSerializer(bookings, many=True).data,
            status.HTTP_201_CREATED,
        )


class VenueBookingsView(APIView):
    """Handler for GET /api/venues/{venue_id}/bookings"""

    def get(self, request: Request, venue_id: str) -> Response:
        return bookings_response(get_booking_service().list_for_venue(venue_id))


class OrganizationBookingsView(APIView):
    """Handler for GET /api/organizations/{organization_id}/bookings"""

    def get(self, request: Request, organization_id: str) -> Response:
        return bookings_response(get_booking_service().list_for_organization(organization_id))
