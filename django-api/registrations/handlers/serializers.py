"""Serializers for transforming registration domain models to API responses."""

from rest_framework import serializers


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    registrationId = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    userId = serializers.UUIDField(source="user_id.value")
    buyerId = serializers.UUIDField(source="buyer_id.value")
    boughtForIds = serializers.SerializerMethodField()
    ticketTypeId = serializers.UUIDField(source="ticket_type_id.value")
    venueId = serializers.UUIDField(source="venue_id.value")
    noOfTickets = serializers.IntegerField(source="no_of_tickets")
    registrationDate = serializers.DateTimeField(source="registration_date")
    paymentStatus = serializers.CharField(source="payment_status.value")
    qrCode = serializers.CharField(source="qr_code")
    checkDate = serializers.DateTimeField(source="check_date", allow_null=True)
    attended = serializers.BooleanField()
    state = serializers.CharField(source="state.value")

    def get_boughtForIds(self, registration) -> list[str]:
        return [str(user_id) for user_id in registration.bought_for_ids]


class CredentialLocatorSerializer(serializers.Serializer):
    """Serializer for CredentialLocator."""

    registrationId = serializers.UUIDField(source="registration_id.value")
    credential = serializers.CharField(source="token")
    qrCode = serializers.CharField(source="artifact_name")
    url = serializers.CharField()
    issuedAt = serializers.DateTimeField(source="issued_at")
