from django.urls import path

from bookings.handlers import (
    BookingDateRangeView,
    BookingDetailView,
    BookingListView,
    BookingsByStatusView,
    BookingStatusView,
    BulkBookingView,
    EventBookingsView,
    OrganizationBookingsView,
    OrganizerBookingsView,
    VenueBookingsView,
)

urlpatterns = [
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/date-range", BookingDateRangeView.as_view(), name="booking-date-range"),
    path("bookings/organizer", OrganizerBookingsView.as_view(), name="booking-organizer"),
    path(
        "bookings/status/<str:approval_status>",
        BookingsByStatusView.as_view(),
        name="booking-by-status",
    ),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path("bookings/<str:booking_id>/status", BookingStatusView.as_view(), name="booking-status"),
    path("events/<str:event_id>/bookings", EventBookingsView.as_view(), name="event-bookings"),
    path("events/<str:event_id>/bookings/bulk", BulkBookingView.as_view(), name="event-bookings-bulk"),
    path("venues/<str:venue_id>/bookings", VenueBookingsView.as_view(), name="venue-bookings"),
    path(
        "organizations/<str:organization_id>/bookings",
        OrganizationBookingsView.as_view(),
        name="organization-bookings",
    ),
]
