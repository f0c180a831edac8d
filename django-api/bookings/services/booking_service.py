"""Booking service - venue booking lifecycle and queries.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any
from accounts.domain import OrganizationId, UserId
from accounts.domain.errors import OrganizationNotFoundError
from accounts.identity import Identity
from accounts.stores.interfaces import DirectoryStore
from bookings.domain import (
    BLOCKING_STATUSES,
    ApprovalStatus,
    BookingId,
    BookingWindow,
    NewBooking,
    VenueBooking,
    VenueId,
)
from bookings.domain.errors import BookingNotFoundError, VenueNotFoundError, VenuesNotFoundError
from bookings.services.validation import BookingValidator, parse_approval_status
from bookings.stores.interfaces import BookingChanges, BookingQuery, BookingStore
from common.dates import parse_request_date, parse_request_time
from common.errors import (
    InvalidRangeError,
    InvalidValueError,
    MissingFieldsError,
    UnauthenticatedError,
)
from common.validation import require_fields
from common.value_objects import Identifier, parse_identifier
from events.domain import EventId
from events.domain.errors import EventNotFoundError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "venueId",
    "startDate",
    "endDate",
    "startTime",
    "endTime",
    "notes",
    "approvalStatus",
    "venueInvoiceId",
)
FILTER_TYPES = ("all", "minutes", "hours", "days")


class BookingService:
    """Service for venue booking operations."""

    def __init__(self, store: BookingStore, directory: DirectoryStore) -> None:
        self._store = store
        self._directory = directory
        self._validator = BookingValidator(store, directory)

    def submit_booking(self, data: Mapping[str, Any], identity: Identity) -> VenueBooking:
        """Validate a booking request and persist it as pending.

        Organization and organizer come from the identity; any approvalStatus
        in the body is ignored.
        """
        organization_id, member = self._validator.validate_identity(identity)
        request = self._validator.validate_request(data)
        self._validator.ensure_no_conflict(request.venue.id, request.window)

        new_booking = NewBooking(
            event_id=request.event_id,
            venue_id=request.venue.id,
            organizer_id=member.id,
            organization_id=organization_id,
            window=request.window,
            total_amount_due=request.venue.amount,
            notes=request.notes,
        )
        with self._store.reserve_venues([request.venue.id]):
            self._validator.ensure_no_conflict(request.venue.id, request.window)
            (booking,) = self._store.create_bookings([new_booking])

        logger.info("Booking %s created for venue %s by %s", booking.id, booking.venue_id, member.id)
        return booking

    def bulk_create_venue_bookings(
        self, event_id: str, data: Mapping[str, Any], identity: Identity
    ) -> list[VenueBooking]:
        """Create several bookings for one event in a single transaction."""
        if not identity.user_id:
            raise UnauthenticatedError()
        rows = data.get("bookings")
        missing = []
        if not data.get("organizationId"):
            missing.append("organizationId")
        if not rows or not isinstance(rows, list):
            missing.append("bookings")
        if missing:
            raise MissingFieldsError(missing)

        parsed_event_id = parse_identifier(EventId, event_id, "eventId")
        acting = dataclasses.replace(identity, organization_id=str(data["organizationId"]))
        organization_id, member = self._validator.validate_identity(acting)
        if not self._store.event_exists(parsed_event_id):
            raise EventNotFoundError(event_id)

        for row in rows:
            if not isinstance(row, Mapping) or not row.get("venueId"):
                raise MissingFieldsError(["venueId"])
        requested = {parse_identifier(VenueId, row["venueId"], "venueId") for row in rows}
        venues = {venue.id: venue for venue in self._store.find_venues(requested)}
        if len(venues) != len(requested):
            missing_ids = [str(venue_id) for venue_id in requested - venues.keys()]
            logger.info("Bulk booking for event %s references unknown venues %s", event_id, missing_ids)
            raise VenuesNotFoundError(missing_ids)

        requests = [self._validator.validate_request(row, parsed_event_id) for row in rows]

        created: list[VenueBooking] = []
        with self._store.reserve_venues(venues):
            # Rows go in one by one so later rows see earlier ones as holds.
            for request in requests:
                self._validator.ensure_no_conflict(request.venue.id, request.window)
                created.extend(
                    self._store.create_bookings(
                        [
                            NewBooking(
                                event_id=parsed_event_id,
                                venue_id=request.venue.id,
                                organizer_id=member.id,
                                organization_id=organization_id,
                                window=request.window,
                                total_amount_due=request.venue.amount,
                                notes=request.notes,
                            )
                        ]
                    )
                )

        logger.info("Created %d bookings for event %s", len(created), event_id)
        return created

    def get_booking(self, booking_id: str) -> VenueBooking:
        booking = self._store.get_booking(self._parse_id(booking_id))
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking

    def update_booking(self, booking_id: str, data: Mapping[str, Any]) -> VenueBooking:
        """Apply a partial update.

        Every supplied field is parsed before anything is written. Changing
        the venue, the window or the notes sends the booking back to pending;
        linking an invoice does not.
        """
        existing = self.get_booking(booking_id)
        if not any(name in data for name in UPDATABLE_FIELDS):
            raise MissingFieldsError(list(UPDATABLE_FIELDS))

        current = existing.window
        start_date = current.start_date
        end_date = current.end_date
        start_time = current.start_time
        end_time = current.end_time
        if "startDate" in data:
            start_date = parse_request_date(data["startDate"], "startDate")
        if "endDate" in data:
            end_date = parse_request_date(data["endDate"], "endDate")
        if "startTime" in data:
            start_time = parse_request_time(data["startTime"], "startTime")
        if "endTime" in data:
            end_time = parse_request_time(data["endTime"], "endTime")
        status = None
        if "approvalStatus" in data:
            status = parse_approval_status(data["approvalStatus"])
        if start_date > end_date:
            raise InvalidRangeError()
        window = BookingWindow(start_date, end_date, start_time, end_time)

        venue = existing.venue
        if "venueId" in data:
            venue_id = parse_identifier(VenueId, data["venueId"], "venueId")
            if venue_id != venue.id:
                venue = self._store.get_venue(venue_id)
                if venue is None:
                    raise VenueNotFoundError(str(venue_id))

        invoice_id = None
        if data.get("venueInvoiceId"):
            invoice_id = parse_identifier(Identifier, data["venueInvoiceId"], "venueInvoiceId").value

        notes = str(data["notes"] or "") if "notes" in data else existing.notes
        moved = window != current or venue.id != existing.venue_id
        if moved or notes != existing.notes:
            status = ApprovalStatus.PENDING
        resulting = status or existing.approval_status

        changes = BookingChanges(
            venue_id=venue.id if venue.id != existing.venue_id else None,
            start_date=window.start_date,
            end_date=window.end_date,
            start_time=window.start_time,
            end_time=window.end_time,
            notes=notes,
            total_amount_due=venue.amount if venue.id != existing.venue_id else None,
            venue_invoice_id=invoice_id,
            approval_status=status,
        )
        newly_holding = resulting in BLOCKING_STATUSES and not existing.holds_venue
        with self._store.reserve_venues([venue.id]):
            if resulting in BLOCKING_STATUSES and (moved or newly_holding):
                self._validator.ensure_no_conflict(venue.id, window, exclude=existing.id)
            updated = self._store.update_booking(existing.id, changes)
        if updated is None:
            raise BookingNotFoundError(booking_id)

        logger.info("Booking %s updated, status %s", updated.id, updated.approval_status.value)
        return updated

    def update_booking_status(self, booking_id: str, value: object) -> VenueBooking:
        """Set the approval status; only pending, approved and rejected exist."""
        if value in (None, ""):
            raise MissingFieldsError(["approvalStatus"])
        status = parse_approval_status(value)
        existing = self.get_booking(booking_id)

        with self._store.reserve_venues([existing.venue_id]):
            if status in BLOCKING_STATUSES:
                self._validator.ensure_no_conflict(
                    existing.venue_id, existing.window, exclude=existing.id
                )
            updated = self._store.update_booking(
                existing.id, BookingChanges(approval_status=status)
            )
        if updated is None:
            raise BookingNotFoundError(booking_id)

        logger.info(
            "Booking %s moved from %s to %s",
            updated.id,
            existing.approval_status.value,
            status.value,
        )
        return updated

    def delete_booking(self, booking_id: str) -> None:
        if not self._store.delete_booking(self._parse_id(booking_id)):
            raise BookingNotFoundError(booking_id)
        logger.info("Booking %s deleted", booking_id)

    def list_bookings(self) -> list[VenueBooking]:
        return self._store.list_bookings(BookingQuery())

    def list_for_event(self, event_id: str) -> list[VenueBooking]:
        parsed = parse_identifier(EventId, event_id, "eventId")
        if not self._store.event_exists(parsed):
            raise EventNotFoundError(event_id)
        return self._store.list_bookings(BookingQuery(event_id=parsed))

    def list_for_venue(self, venue_id: str) -> list[VenueBooking]:
        parsed = parse_identifier(VenueId, venue_id, "venueId")
        if self._store.get_venue(parsed) is None:
            raise VenueNotFoundError(venue_id)
        return self._store.list_bookings(BookingQuery(venue_id=parsed))

    def list_for_organization(self, organization_id: str) -> list[VenueBooking]:
        parsed = parse_identifier(OrganizationId, organization_id, "organizationId")
        if self._directory.get_organization(parsed) is None:
            raise OrganizationNotFoundError(organization_id)
        return self._store.list_bookings(BookingQuery(organization_id=parsed))

    def list_for_organizer(self, identity: Identity) -> list[VenueBooking]:
        """Bookings made by the calling user."""
        if not identity.user_id:
            raise UnauthenticatedError()
        user_id = parse_identifier(UserId, identity.user_id, "userId")
        return self._store.list_bookings(BookingQuery(organizer_id=user_id))

    def list_by_status(self, value: str) -> list[VenueBooking]:
        return self._store.list_bookings(BookingQuery(status=parse_approval_status(value)))

    def list_by_date_range(self, params: Mapping[str, Any]) -> list[VenueBooking]:
        """Bookings lying entirely inside [startDate, endDate].

        filterType narrows further by the minute or hour of the start time, or
        the day of month of the start date; "all" applies no extra filter.
        """
        require_fields(params, ("startDate", "endDate"))
        start_date = parse_request_date(params["startDate"], "startDate")
        end_date = parse_request_date(params["endDate"], "endDate")
        if start_date > end_date:
            raise InvalidRangeError()

        filter_type = params.get("filterType") or "all"
        if filter_type not in FILTER_TYPES:
            raise InvalidValueError("filterType", f"must be one of {', '.join(FILTER_TYPES)}")

        query = BookingQuery(starts_on_or_after=start_date, ends_on_or_before=end_date)
        if filter_type == "minutes":
            bounds = _int_range(params, "minStart", "minEnd") or _int_range(params, "rangeStart", "rangeEnd")
            query = dataclasses.replace(query, start_minute_range=bounds)
        elif filter_type == "hours":
            query = dataclasses.replace(query, start_hour_range=_int_range(params, "rangeStart", "rangeEnd"))
        elif filter_type == "days":
            query = dataclasses.replace(query, start_day_range=_int_range(params, "rangeStart", "rangeEnd"))
        return self._store.list_bookings(query)

    @staticmethod
    def _parse_id(booking_id: str) -> BookingId:
        return parse_identifier(BookingId, booking_id, "bookingId")


def _int_range(params: Mapping[str, Any], low: str, high: str) -> tuple[int, int] | None:
    """Return (low, high) when both bounds are given, else None."""
    if params.get(low) in (None, "") or params.get(high) in (None, ""):
        return None
    bounds = []
    for name in (low, high):
        try:
            bounds.append(int(params[name]))
        except (TypeError, ValueError):
            raise InvalidValueError(name, "must be an integer") from None
    return bounds[0], bounds[1]
