"""Django ORM implementation of the BookingStore."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import timedelta

from django.db import DatabaseError, NotSupportedError, transaction
from django.db.models import QuerySet

from accounts.domain import OrganizationId, UserId
from bookings import models
from bookings.domain import (
    BLOCKING_STATUSES,
    ApprovalStatus,
    BookingId,
    BookingWindow,
    NewBooking,
    Venue,
    VenueBooking,
    VenueId,
)
from bookings.stores.interfaces import BookingChanges, BookingQuery, BookingStore
from common.errors import StoreFailureError
from common.value_objects import Capacity, Money
from events.domain import EventId
from events.models import Event


def _lock_queryset_if_possible(queryset: QuerySet) -> QuerySet:
    """Apply select_for_update when inside transaction.atomic()."""
    if not transaction.get_connection().in_atomic_block:
        return queryset
    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def to_venue(row: models.Venue) -> Venue:
    return Venue(
        id=VenueId(row.id),
        name=row.name,
        location=row.location,
        capacity=Capacity(row.capacity),
        amount=Money(row.amount),
        organization_id=OrganizationId(row.organization_id),
    )


def to_booking(row: models.VenueBooking) -> VenueBooking:
    return VenueBooking(
        id=BookingId(row.id),
        event_id=EventId(row.event_id),
        venue=to_venue(row.venue),
        organizer_id=UserId(row.organizer_id),
        organization_id=OrganizationId(row.organization_id),
        window=BookingWindow(
            start_date=row.start_date,
            end_date=row.end_date,
            start_time=row.start_time,
            end_time=row.end_time,
        ),
        approval_status=ApprovalStatus(row.approval_status),
        total_amount_due=Money(row.total_amount_due),
        venue_invoice_id=row.venue_invoice_id,
        notes=row.notes,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _bookings() -> QuerySet:
    return models.VenueBooking.objects.select_related("venue")


class DjangoBookingStore(BookingStore):
    """Database-backed booking store using Django ORM."""

    def get_venue(self, venue_id: VenueId) -> Venue | None:
        try:
            row = models.Venue.objects.filter(pk=venue_id.value).first()
        except DatabaseError as exc:
            raise StoreFailureError("get_venue") from exc
        return to_venue(row) if row is not None else None

    def find_venues(self, venue_ids: Iterable[VenueId]) -> list[Venue]:
        try:
            rows = models.Venue.objects.filter(pk__in=[venue_id.value for venue_id in venue_ids])
            return [to_venue(row) for row in rows]
        except DatabaseError as exc:
            raise StoreFailureError("find_venues") from exc

    def event_exists(self, event_id: EventId) -> bool:
        try:
            return Event.objects.filter(pk=event_id.value).exists()
        except DatabaseError as exc:
            raise StoreFailureError("event_exists") from exc

    @contextmanager
    def reserve_venues(self, venue_ids: Iterable[VenueId]) -> Iterator[None]:
        ids = sorted({venue_id.value for venue_id in venue_ids}, key=str)
        try:
            with transaction.atomic():
                # Lock in a stable order so concurrent batches cannot deadlock.
                list(
                    _lock_queryset_if_possible(
                        models.Venue.objects.filter(pk__in=ids).order_by("pk")
                    ).values_list("pk", flat=True)
                )
                yield
        except DatabaseError as exc:
            raise StoreFailureError("reserve_venues") from exc

    def bookings_holding_venue(
        self,
        venue_id: VenueId,
        window: BookingWindow,
        exclude: BookingId | None = None,
    ) -> list[VenueBooking]:
        try:
            # An overnight booking begun the day before can still reach into the window.
            queryset = _bookings().filter(
                venue_id=venue_id.value,
                approval_status__in=[status.value for status in BLOCKING_STATUSES],
                start_date__lte=window.last_day,
                end_date__gte=window.start_date - timedelta(days=1),
            )
            if exclude is not None:
                queryset = queryset.exclude(pk=exclude.value)
            return [to_booking(row) for row in queryset]
        except DatabaseError as exc:
            raise StoreFailureError("bookings_holding_venue") from exc

    def create_bookings(self, new_bookings: list[NewBooking]) -> list[VenueBooking]:
        created = []
        try:
            with transaction.atomic():
                for new_booking in new_bookings:
                    row = models.VenueBooking.objects.create(
                        event_id=new_booking.event_id.value,
                        venue_id=new_booking.venue_id.value,
                        organizer_id=new_booking.organizer_id.value,
                        organization_id=new_booking.organization_id.value,
                        start_date=new_booking.window.start_date,
                        end_date=new_booking.window.end_date,
                        start_time=new_booking.window.start_time,
                        end_time=new_booking.window.end_time,
                        approval_status=new_booking.approval_status.value,
                        total_amount_due=new_booking.total_amount_due.amount,
                        notes=new_booking.notes,
                    )
                    created.append(row.pk)
            rows = {row.pk: row for row in _bookings().filter(pk__in=created)}
        except DatabaseError as exc:
            raise StoreFailureError("create_bookings") from exc
        return [to_booking(rows[pk]) for pk in created]

    def get_booking(self, booking_id: BookingId) -> VenueBooking | None:
        try:
            row = _bookings().filter(pk=booking_id.value).first()
        except DatabaseError as exc:
            raise StoreFailureError("get_booking") from exc
        return to_booking(row) if row is not None else None

    def update_booking(self, booking_id: BookingId, changes: BookingChanges) -> VenueBooking | None:
        try:
            row = models.VenueBooking.objects.filter(pk=booking_id.value).first()
            if row is None:
                return None
            if changes.venue_id is not None:
                row.venue_id = changes.venue_id.value
            for field_name in ("start_date", "end_date", "start_time", "end_time", "notes"):
                value = getattr(changes, field_name)
                if value is not None:
                    setattr(row, field_name, value)
            if changes.total_amount_due is not None:
                row.total_amount_due = changes.total_amount_due.amount
            if changes.venue_invoice_id is not None:
                row.venue_invoice_id = changes.venue_invoice_id
            if changes.approval_status is not None:
                row.approval_status = changes.approval_status.value
            row.save()
        except DatabaseError as exc:
            raise StoreFailureError("update_booking") from exc
        return self.get_booking(booking_id)

    def delete_booking(self, booking_id: BookingId) -> bool:
        try:
            deleted, _ = models.VenueBooking.objects.filter(pk=booking_id.value).delete()
        except DatabaseError as exc:
            raise StoreFailureError("delete_booking") from exc
        return deleted > 0

    def list_bookings(self, query: BookingQuery) -> list[VenueBooking]:
        filters = {}
        if query.event_id is not None:
            filters["event_id"] = query.event_id.value
        if query.venue_id is not None:
            filters["venue_id"] = query.venue_id.value
        if query.organizer_id is not None:
            filters["organizer_id"] = query.organizer_id.value
        if query.organization_id is not None:
            filters["organization_id"] = query.organization_id.value
        if query.status is not None:
            filters["approval_status"] = query.status.value
        if query.starts_on_or_after is not None:
            filters["start_date__gte"] = query.starts_on_or_after
        if query.ends_on_or_before is not None:
            filters["end_date__lte"] = query.ends_on_or_before
        if query.start_minute_range is not None:
            filters["start_time__minute__range"] = query.start_minute_range
        if query.start_hour_range is not None:
            filters["start_time__hour__range"] = query.start_hour_range
        if query.start_day_range is not None:
            filters["start_date__day__range"] = query.start_day_range
        try:
            return [to_booking(row) for row in _bookings().filter(**filters)]
        except DatabaseError as exc:
            raise StoreFailureError("list_bookings") from exc
