"""Booking validation pipeline.

Checks run in a fixed order and every one of them precedes the write:

1. identity shape and membership (accounts.services.authorize_member)
2. required fields and identifier format
3. date/time parsing and date ordering
4. referenced event and venue exist
5. no pending or approved booking holds the venue for an overlapping window
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from accounts.domain import Member, OrganizationId
from accounts.identity import Identity
from accounts.services import authorize_member
from accounts.stores.interfaces import DirectoryStore
from bookings.domain import ApprovalStatus, BookingId, BookingWindow, Venue, VenueId
from bookings.domain.errors import SchedulingConflictError, VenueNotFoundError
from bookings.stores.interfaces import BookingStore
from common.dates import parse_request_date, parse_request_time
from common.errors import InvalidRangeError, InvalidStatusError
from common.validation import require_fields
from common.value_objects import parse_identifier
from events.domain import EventId
from events.domain.errors import EventNotFoundError

logger = logging.getLogger(__name__)

WINDOW_FIELDS = ("startDate", "endDate", "startTime", "endTime")
REQUIRED_FIELDS = ("eventId", "venueId", *WINDOW_FIELDS)


@dataclass(frozen=True)
class BookingRequest:
    """A booking request whose fields parsed and whose references resolve."""

    event_id: EventId
    venue: Venue
    window: BookingWindow
    notes: str = ""


def parse_approval_status(value: object) -> ApprovalStatus:
    """Parse an approval status; only pending, approved and rejected exist."""
    try:
        return ApprovalStatus(value)
    except (TypeError, ValueError):
        raise InvalidStatusError(value, ApprovalStatus.values()) from None


def parse_window(data: Mapping[str, Any]) -> BookingWindow:
    """Parse the four window fields of a request.

    Raises:
        InvalidDateError: If a date or time does not parse.
        InvalidRangeError: If startDate falls after endDate.
    """
    start_date = parse_request_date(data["startDate"], "startDate")
    end_date = parse_request_date(data["endDate"], "endDate")
    start_time = parse_request_time(data["startTime"], "startTime")
    end_time = parse_request_time(data["endTime"], "endTime")
    if start_date > end_date:
        raise InvalidRangeError()
    return BookingWindow(start_date, end_date, start_time, end_time)


class BookingValidator:
    """Validates booking requests against identity, references and schedule."""

    def __init__(self, store: BookingStore, directory: DirectoryStore) -> None:
        self._store = store
        self._directory = directory

    def validate_identity(self, identity: Identity) -> tuple[OrganizationId, Member]:
        return authorize_member(identity, self._directory)

    def validate_request(
        self, data: Mapping[str, Any], event_id: EventId | None = None
    ) -> BookingRequest:
        """Validate the body of a booking request.

        When event_id is given (bulk rows) the body does not carry one.
        """
        require_fields(data, REQUIRED_FIELDS if event_id is None else REQUIRED_FIELDS[1:])

        if event_id is None:
            event_id = parse_identifier(EventId, data["eventId"], "eventId")
        venue_id = parse_identifier(VenueId, data["venueId"], "venueId")
        window = parse_window(data)

        if not self._store.event_exists(event_id):
            raise EventNotFoundError(str(event_id))
        venue = self._store.get_venue(venue_id)
        if venue is None:
            raise VenueNotFoundError(str(venue_id))

        return BookingRequest(
            event_id=event_id,
            venue=venue,
            window=window,
            notes=str(data.get("notes") or ""),
        )

    def ensure_no_conflict(
        self,
        venue_id: VenueId,
        window: BookingWindow,
        exclude: BookingId | None = None,
    ) -> None:
        """Raise SchedulingConflictError if the venue is held for the window."""
        candidates = self._store.bookings_holding_venue(venue_id, window, exclude=exclude)
        for booking in candidates:
            if booking.conflicts_with(venue_id, window):
                logger.info(
                    "Venue %s requested for %s..%s conflicts with booking %s",
                    venue_id,
                    window.start_date,
                    window.end_date,
                    booking.id,
                )
                raise SchedulingConflictError(str(booking.id))
