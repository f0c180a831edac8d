"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class TicketTypeSerializer(serializers.Serializer):
    """Serializer for TicketType domain model."""

    ticketTypeId = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, source="price.amount")
    quantity = serializers.IntegerField(source="quantity.value")
    createdAt = serializers.DateTimeField(source="created_at")


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    eventId = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    description = serializers.CharField()
    status = serializers.CharField(source="status.value")
    organizerId = serializers.UUIDField(source="organizer_id.value")
    organizationId = serializers.UUIDField(source="organization_id.value")
    startDate = serializers.DateField(source="start_date", allow_null=True)
    endDate = serializers.DateField(source="end_date", allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    ticketTypes = TicketTypeSerializer(source="ticket_types", many=True)
