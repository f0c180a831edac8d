"""Django ORM models (persistence layer) for venues and bookings."""

import uuid

from django.db import models
from django.db.models import F, Q

from bookings.domain.value_objects import ApprovalStatus


class Venue(models.Model):
    """Persistence model for venues."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField()
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    organization = models.ForeignKey(
        "accounts.Organization", on_delete=models.CASCADE, related_name="venues"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class VenueBooking(models.Model):
    """Persistence model for venue bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(
        "events.Event", on_delete=models.CASCADE, related_name="venue_bookings"
    )
    venue = models.ForeignKey(Venue, on_delete=models.CASCADE, related_name="bookings")
    organizer = models.ForeignKey(
        "accounts.User", on_delete=models.PROTECT, related_name="bookings"
    )
    organization = models.ForeignKey(
        "accounts.Organization", on_delete=models.CASCADE, related_name="bookings"
    )
    start_date = models.DateField()
    end_date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    approval_status = models.CharField(
        max_length=16,
        choices=[(status.value, status.name.title()) for status in ApprovalStatus],
        default=ApprovalStatus.PENDING.value,
    )
    total_amount_due = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    venue_invoice_id = models.UUIDField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date", "start_time"]
        indexes = [
            models.Index(
                fields=["venue", "start_date", "end_date"], name="booking_venue_dates_idx"
            ),
            models.Index(fields=["approval_status"], name="booking_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(start_date__lte=F("end_date")),
                name="booking_start_before_end",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.venue} {self.start_date} - {self.end_date}"
