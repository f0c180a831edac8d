"""Django ORM models (persistence layer) for registrations."""

import uuid

from django.db import models

from registrations.domain.value_objects import PaymentStatus


class Registration(models.Model):
    """Persistence model for event registrations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        "events.Event", on_delete=models.CASCADE, related_name="registrations"
    )
    user = models.ForeignKey(
        "accounts.User", on_delete=models.CASCADE, related_name="registrations"
    )
    buyer = models.ForeignKey(
        "accounts.User", on_delete=models.PROTECT, related_name="purchased_registrations"
    )
    bought_for_ids = models.JSONField(default=list, blank=True)
    ticket_type = models.ForeignKey(
        "events.TicketType", on_delete=models.PROTECT, related_name="registrations"
    )
    venue = models.ForeignKey(
        "bookings.Venue", on_delete=models.PROTECT, related_name="registrations"
    )
    no_of_tickets = models.PositiveIntegerField(default=1)
    registration_date = models.DateTimeField()
    payment_status = models.CharField(
        max_length=16,
        choices=[(status.value, status.name.title()) for status in PaymentStatus],
        default=PaymentStatus.PENDING.value,
    )
    qr_code = models.CharField(max_length=255, blank=True)
    check_date = models.DateTimeField(null=True, blank=True)
    attended = models.BooleanField(default=False)

    class Meta:
        ordering = ["-registration_date"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "user"], name="registration_unique_attendee"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} @ {self.event}"


class RegistrationCredential(models.Model):
    """Every credential ever issued for a registration.

    Only the newest one is live; rotation stamps revoked_at on the previous
    one and points superseded_by at its replacement.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    token = models.CharField(max_length=512, unique=True)
    registration = models.ForeignKey(
        Registration, on_delete=models.CASCADE, related_name="credentials"
    )
    artifact_name = models.CharField(max_length=255)
    issued_at = models.DateTimeField()
    revoked_at = models.DateTimeField(null=True, blank=True)
    superseded_by = models.ForeignKey(
        "self", null=True, blank=True, on_delete=models.SET_NULL, related_name="supersedes"
    )

    class Meta:
        ordering = ["-issued_at"]
        indexes = [
            models.Index(fields=["registration", "revoked_at"], name="credential_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.registration_id} issued {self.issued_at:%Y-%m-%d %H:%M}"
