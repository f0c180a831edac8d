from bookings.handlers.views import (
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

__all__ = [
    "BookingDateRangeView",
    "BookingDetailView",
    "BookingListView",
    "BookingsByStatusView",
    "BookingStatusView",
    "BulkBookingView",
    "EventBookingsView",
    "OrganizationBookingsView",
    "OrganizerBookingsView",
    "VenueBookingsView",
]
