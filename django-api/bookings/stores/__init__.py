from bookings.stores.django_store import DjangoBookingStore
from bookings.stores.interfaces import BookingChanges, BookingQuery, BookingStore

__all__ = ["BookingChanges", "BookingQuery", "BookingStore", "DjangoBookingStore"]
