from bookings.services.booking_service import BookingService
from bookings.services.validation import BookingRequest, BookingValidator

__all__ = ["BookingRequest", "BookingService", "BookingValidator"]
