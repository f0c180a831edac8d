"""Serializers for transforming booking domain models to API responses."""

from rest_framework import serializers


class VenueSerializer(serializers.Serializer):
    """Serializer for Venue domain model."""

    venueId = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    location = serializers.CharField()
    capacity = serializers.IntegerField(source="capacity.value")
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, source="amount.amount")
    organizationId = serializers.UUIDField(source="organization_id.value")


class BookingSerializer(serializers.Serializer):
    """Serializer for VenueBooking domain model."""

    bookingId = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    venueId = serializers.UUIDField(source="venue_id.value")
    venue = VenueSerializer()
    organizerId = serializers.UUIDField(source="organizer_id.value")
    organizationId = serializers.UUIDField(source="organization_id.value")
    startDate = serializers.DateField(source="window.start_date")
    endDate = serializers.DateField(source="window.end_date")
    startTime = serializers.TimeField(source="window.start_time")
    endTime = serializers.TimeField(source="window.end_time")
    approvalStatus = serializers.CharField(source="approval_status.value")
    totalAmountDue = serializers.DecimalField(
        max_digits=10, decimal_places=2, source="total_amount_due.amount"
    )
    venueInvoiceId = serializers.UUIDField(source="venue_invoice_id", allow_null=True)
    notes = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
