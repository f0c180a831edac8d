"""Unit tests for BookingService and the booking validation pipeline.

Run with: pytest tests/test_booking_service.py -v
"""

from datetime import date, time
from decimal import Decimal
from uuid import uuid4

import pytest

from accounts.domain import OrganizationId, UserId
from accounts.domain.errors import OrganizationNotFoundError, UserNotFoundError
from accounts.identity import Identity
from bookings.domain import ApprovalStatus, BookingWindow, NewBooking, Venue, VenueId
from bookings.domain.errors import (
    BookingNotFoundError,
    SchedulingConflictError,
    VenueNotFoundError,
    VenuesNotFoundError,
)
from bookings.services import BookingService
from common.errors import (
    ErrorCode,
    ForbiddenError,
    InvalidDateError,
    InvalidIdentifierError,
    InvalidRangeError,
    InvalidStatusError,
    InvalidValueError,
    MissingFieldsError,
    UnauthenticatedError,
)
from common.value_objects import Capacity, Money
from events.domain import EventId
from events.domain.errors import EventNotFoundError
from tests.fakes import InMemoryBookingStore, InMemoryDirectoryStore


class Scenario:
    """A directory with one organization, one member, one event and two venues."""

    def __init__(self) -> None:
        self.directory = InMemoryDirectoryStore()
        self.store = InMemoryBookingStore()
        self.service = BookingService(self.store, self.directory)

        self.organization_id = OrganizationId(uuid4())
        self.other_organization_id = OrganizationId(uuid4())
        self.directory.add_organization(self.organization_id, "Org A")
        self.directory.add_organization(self.other_organization_id, "Org B")
        self.user_id = UserId(uuid4())
        self.directory.add_member(self.user_id, self.organization_id)

        self.event_id = EventId(uuid4())
        self.store.events.add(self.event_id)
        self.venue = self.add_venue(Decimal("250.00"))
        self.second_venue = self.add_venue(Decimal("90.00"))

    def add_venue(self, amount: Decimal) -> Venue:
        venue = Venue(
            id=VenueId(uuid4()),
            name="Hall",
            location="Kigali",
            capacity=Capacity(100),
            amount=Money(amount),
            organization_id=self.organization_id,
        )
        self.store.venues[venue.id] = venue
        return venue

    def identity(self, organization_id: OrganizationId | None = None) -> Identity:
        organization_id = organization_id or self.organization_id
        return Identity(
            user_id=str(self.user_id),
            organization_id=str(organization_id),
            organizations=(str(self.organization_id),),
        )

    def request(self, **overrides) -> dict:
        data = {
            "eventId": str(self.event_id),
            "venueId": str(self.venue.id),
            "startDate": "2025-03-10",
            "endDate": "2025-03-10",
            "startTime": "09:00",
            "endTime": "12:00",
        }
        data.update(overrides)
        return {key: value for key, value in data.items() if value is not None}

    def seed(self, start_time="09:00", end_time="12:00", status=ApprovalStatus.PENDING, venue=None):
        (booking,) = self.store.create_bookings(
            [
                NewBooking(
                    event_id=self.event_id,
                    venue_id=(venue or self.venue).id,
                    organizer_id=self.user_id,
                    organization_id=self.organization_id,
                    window=BookingWindow(
                        date(2025, 3, 10),
                        date(2025, 3, 10),
                        time.fromisoformat(start_time),
                        time.fromisoformat(end_time),
                    ),
                    total_amount_due=(venue or self.venue).amount,
                    approval_status=status,
                )
            ]
        )
        return booking


@pytest.fixture
def scenario() -> Scenario:
    return Scenario()


class TestSubmitIdentityChecks:
    def test_missing_user_is_unauthenticated(self, scenario):
        with pytest.raises(UnauthenticatedError):
            scenario.service.submit_booking(scenario.request(), Identity())

    def test_missing_organization_is_unauthenticated(self, scenario):
        with pytest.raises(UnauthenticatedError):
            scenario.service.submit_booking(
                scenario.request(), Identity(user_id=str(scenario.user_id))
            )

    def test_malformed_organization_id(self, scenario):
        identity = Identity(user_id=str(scenario.user_id), organization_id="org-B")
        with pytest.raises(InvalidIdentifierError) as excinfo:
            scenario.service.submit_booking(scenario.request(), identity)
        assert excinfo.value.field_name == "organizationId"

    def test_malformed_user_id(self, scenario):
        identity = Identity(user_id="user-1", organization_id=str(scenario.organization_id))
        with pytest.raises(InvalidIdentifierError) as excinfo:
            scenario.service.submit_booking(scenario.request(), identity)
        assert excinfo.value.field_name == "userId"

    def test_unknown_organization(self, scenario):
        with pytest.raises(OrganizationNotFoundError):
            scenario.service.submit_booking(
                scenario.request(), scenario.identity(OrganizationId(uuid4()))
            )

    def test_unknown_user(self, scenario):
        identity = Identity(user_id=str(uuid4()), organization_id=str(scenario.organization_id))
        with pytest.raises(UserNotFoundError):
            scenario.service.submit_booking(scenario.request(), identity)

    def test_member_of_another_organization_is_forbidden(self, scenario):
        with pytest.raises(ForbiddenError):
            scenario.service.submit_booking(
                scenario.request(), scenario.identity(scenario.other_organization_id)
            )
        assert scenario.store.bookings == {}

    def test_first_membership_is_used_when_no_organization_given(self, scenario):
        identity = Identity(
            user_id=str(scenario.user_id), organizations=(str(scenario.organization_id),)
        )
        booking = scenario.service.submit_booking(scenario.request(), identity)
        assert booking.organization_id == scenario.organization_id


class TestSubmitRequestChecks:
    def test_lists_every_missing_field(self, scenario):
        with pytest.raises(MissingFieldsError) as excinfo:
            scenario.service.submit_booking(
                scenario.request(venueId=None, endTime=None), scenario.identity()
            )
        assert excinfo.value.fields == ("venueId", "endTime")

    def test_malformed_venue_id(self, scenario):
        with pytest.raises(InvalidIdentifierError):
            scenario.service.submit_booking(scenario.request(venueId="hall-1"), scenario.identity())

    def test_unparseable_date(self, scenario):
        with pytest.raises(InvalidDateError):
            scenario.service.submit_booking(
                scenario.request(startDate="10/03/2025"), scenario.identity()
            )

    def test_unparseable_time(self, scenario):
        with pytest.raises(InvalidDateError):
            scenario.service.submit_booking(scenario.request(endTime="noon"), scenario.identity())

    def test_start_after_end_is_invalid_range(self, scenario):
        with pytest.raises(InvalidRangeError):
            scenario.service.submit_booking(
                scenario.request(startDate="2025-03-10", endDate="2025-03-09"),
                scenario.identity(),
            )

    def test_unknown_event(self, scenario):
        with pytest.raises(EventNotFoundError):
            scenario.service.submit_booking(
                scenario.request(eventId=str(uuid4())), scenario.identity()
            )

    def test_unknown_venue(self, scenario):
        with pytest.raises(VenueNotFoundError):
            scenario.service.submit_booking(
                scenario.request(venueId=str(uuid4())), scenario.identity()
            )


class TestSubmitCommit:
    def test_booking_is_pending_whatever_the_caller_asks(self, scenario):
        booking = scenario.service.submit_booking(
            scenario.request(approvalStatus="approved"), scenario.identity()
        )
        assert booking.approval_status is ApprovalStatus.PENDING

    def test_ownership_comes_from_identity(self, scenario):
        booking = scenario.service.submit_booking(
            scenario.request(organizerId=str(uuid4()), organizationId=str(uuid4())),
            scenario.identity(),
        )
        assert booking.organizer_id == scenario.user_id
        assert booking.organization_id == scenario.organization_id

    def test_amount_due_copied_from_venue(self, scenario):
        booking = scenario.service.submit_booking(scenario.request(), scenario.identity())
        assert booking.total_amount_due == Money(Decimal("250.00"))

    def test_commit_runs_under_venue_reservation(self, scenario):
        scenario.service.submit_booking(scenario.request(), scenario.identity())
        assert scenario.store.reservations == [frozenset({scenario.venue.id})]

    def test_overnight_window_is_accepted(self, scenario):
        booking = scenario.service.submit_booking(
            scenario.request(startTime="22:00", endTime="02:00"), scenario.identity()
        )
        assert booking.window.start_time == time(22, 0)


class TestConflicts:
    @pytest.mark.parametrize("status", [ApprovalStatus.PENDING, ApprovalStatus.APPROVED])
    def test_overlapping_hold_conflicts(self, scenario, status):
        existing = scenario.seed("10:00", "11:00", status)
        with pytest.raises(SchedulingConflictError) as excinfo:
            scenario.service.submit_booking(scenario.request(), scenario.identity())
        assert excinfo.value.details == {"conflictingBookingId": str(existing.id)}
        assert len(scenario.store.bookings) == 1

    def test_rejected_booking_does_not_hold_the_venue(self, scenario):
        scenario.seed("10:00", "11:00", ApprovalStatus.REJECTED)
        scenario.service.submit_booking(scenario.request(), scenario.identity())
        assert len(scenario.store.bookings) == 2

    def test_other_venue_does_not_conflict(self, scenario):
        scenario.seed("10:00", "11:00", venue=scenario.second_venue)
        scenario.service.submit_booking(scenario.request(), scenario.identity())

    def test_back_to_back_windows_do_not_conflict(self, scenario):
        scenario.seed("12:00", "15:00")
        scenario.service.submit_booking(scenario.request(), scenario.identity())

    def test_second_of_two_identical_requests_is_rejected(self, scenario):
        scenario.service.submit_booking(scenario.request(), scenario.identity())
        with pytest.raises(SchedulingConflictError):
            scenario.service.submit_booking(scenario.request(), scenario.identity())

    def test_overnight_hold_blocks_the_following_morning(self, scenario):
        existing = scenario.seed("22:00", "02:00")
        with pytest.raises(SchedulingConflictError) as excinfo:
            scenario.service.submit_booking(
                scenario.request(
                    startDate="2025-03-11", endDate="2025-03-11", startTime="00:30", endTime="01:00"
                ),
                scenario.identity(),
            )
        assert excinfo.value.details == {"conflictingBookingId": str(existing.id)}

    def test_overnight_hold_leaves_its_start_morning_free(self, scenario):
        scenario.seed("22:00", "02:00")
        scenario.service.submit_booking(
            scenario.request(startTime="00:30", endTime="01:00"), scenario.identity()
        )
        assert len(scenario.store.bookings) == 2

    def test_overnight_request_meets_a_hold_on_the_next_day(self, scenario):
        scenario.store.create_bookings(
            [
                NewBooking(
                    event_id=scenario.event_id,
                    venue_id=scenario.venue.id,
                    organizer_id=scenario.user_id,
                    organization_id=scenario.organization_id,
                    window=BookingWindow(date(2025, 3, 11), date(2025, 3, 11), time(1, 0), time(3, 0)),
                    total_amount_due=scenario.venue.amount,
                    approval_status=ApprovalStatus.APPROVED,
                )
            ]
        )
        with pytest.raises(SchedulingConflictError):
            scenario.service.submit_booking(
                scenario.request(startTime="23:00", endTime="01:30"), scenario.identity()
            )


class TestUpdateBooking:
    def test_unknown_booking(self, scenario):
        with pytest.raises(BookingNotFoundError):
            scenario.service.update_booking(str(uuid4()), {"notes": "x"})

    def test_empty_patch_is_rejected(self, scenario):
        booking = scenario.seed()
        with pytest.raises(MissingFieldsError):
            scenario.service.update_booking(str(booking.id), {})

    def test_bad_date_rejects_whole_update(self, scenario):
        booking = scenario.seed()
        with pytest.raises(InvalidDateError):
            scenario.service.update_booking(
                str(booking.id), {"notes": "changed", "endDate": "not-a-date"}
            )
        assert scenario.store.get_booking(booking.id).notes == ""

    def test_invalid_status_in_patch(self, scenario):
        booking = scenario.seed()
        with pytest.raises(InvalidStatusError):
            scenario.service.update_booking(str(booking.id), {"approvalStatus": "cancelled"})

    def test_merged_range_is_checked(self, scenario):
        booking = scenario.seed()
        with pytest.raises(InvalidRangeError):
            scenario.service.update_booking(str(booking.id), {"startDate": "2025-03-11"})

    def test_content_change_resets_to_pending(self, scenario):
        booking = scenario.seed(status=ApprovalStatus.APPROVED)
        updated = scenario.service.update_booking(str(booking.id), {"notes": "Bring chairs"})
        assert updated.notes == "Bring chairs"
        assert updated.approval_status is ApprovalStatus.PENDING

    def test_content_change_wins_over_requested_status(self, scenario):
        booking = scenario.seed()
        updated = scenario.service.update_booking(
            str(booking.id), {"notes": "edited", "approvalStatus": "approved"}
        )
        assert updated.approval_status is ApprovalStatus.PENDING

    def test_status_only_patch_applies_status(self, scenario):
        booking = scenario.seed()
        updated = scenario.service.update_booking(str(booking.id), {"approvalStatus": "rejected"})
        assert updated.approval_status is ApprovalStatus.REJECTED

    def test_moving_into_a_held_window_conflicts(self, scenario):
        held = scenario.seed("14:00", "16:00")
        booking = scenario.seed("09:00", "10:00")
        with pytest.raises(SchedulingConflictError) as excinfo:
            scenario.service.update_booking(str(booking.id), {"endTime": "15:00"})
        assert excinfo.value.conflicting_booking_id == str(held.id)

    def test_booking_does_not_conflict_with_itself(self, scenario):
        booking = scenario.seed("09:00", "12:00")
        updated = scenario.service.update_booking(str(booking.id), {"endTime": "13:00"})
        assert updated.window.end_time == time(13, 0)

    def test_changing_venue_copies_its_amount(self, scenario):
        booking = scenario.seed()
        updated = scenario.service.update_booking(
            str(booking.id), {"venueId": str(scenario.second_venue.id)}
        )
        assert updated.venue_id == scenario.second_venue.id
        assert updated.total_amount_due == Money(Decimal("90.00"))

    def test_linking_an_invoice_keeps_status(self, scenario):
        booking = scenario.seed(status=ApprovalStatus.APPROVED)
        invoice_id = uuid4()
        updated = scenario.service.update_booking(str(booking.id), {"venueInvoiceId": str(invoice_id)})
        assert updated.venue_invoice_id == invoice_id
        assert updated.approval_status is ApprovalStatus.APPROVED

    @pytest.mark.parametrize("value", ["INV-1", f"{uuid4()}\n", 42])
    def test_malformed_invoice_id(self, scenario, value):
        booking = scenario.seed()
        with pytest.raises(InvalidIdentifierError) as excinfo:
            scenario.service.update_booking(str(booking.id), {"venueInvoiceId": value})
        assert excinfo.value.field_name == "venueInvoiceId"


class TestUpdateBookingStatus:
    @pytest.mark.parametrize("value", ["cancelled", "APPROVED", "done", 3])
    def test_only_closed_enumeration_is_accepted(self, scenario, value):
        booking = scenario.seed()
        with pytest.raises(InvalidStatusError) as excinfo:
            scenario.service.update_booking_status(str(booking.id), value)
        assert excinfo.value.details == {"allowed": ["pending", "approved", "rejected"]}

    def test_missing_status(self, scenario):
        booking = scenario.seed()
        with pytest.raises(MissingFieldsError):
            scenario.service.update_booking_status(str(booking.id), None)

    def test_approve(self, scenario):
        booking = scenario.seed()
        updated = scenario.service.update_booking_status(str(booking.id), "approved")
        assert updated.approval_status is ApprovalStatus.APPROVED

    def test_reinstating_rejected_booking_rechecks_conflicts(self, scenario):
        rejected = scenario.seed("09:00", "12:00", ApprovalStatus.REJECTED)
        scenario.seed("10:00", "11:00", ApprovalStatus.APPROVED)
        with pytest.raises(SchedulingConflictError):
            scenario.service.update_booking_status(str(rejected.id), "approved")


class TestBulkCreate:
    def payload(self, scenario, *venue_ids, **overrides) -> dict:
        rows = [
            {
                "venueId": str(venue_id),
                "startDate": "2025-04-01",
                "endDate": "2025-04-02",
                "startTime": "08:00",
                "endTime": "18:00",
            }
            for venue_id in venue_ids
        ]
        data = {"organizationId": str(scenario.organization_id), "bookings": rows}
        data.update(overrides)
        return data

    def test_requires_user(self, scenario):
        with pytest.raises(UnauthenticatedError):
            scenario.service.bulk_create_venue_bookings(
                str(scenario.event_id), self.payload(scenario, scenario.venue.id), Identity()
            )

    def test_requires_organization_and_rows(self, scenario):
        with pytest.raises(MissingFieldsError) as excinfo:
            scenario.service.bulk_create_venue_bookings(
                str(scenario.event_id),
                {"bookings": []},
                Identity(user_id=str(scenario.user_id)),
            )
        assert excinfo.value.fields == ("organizationId", "bookings")

    def test_unknown_venue_rejects_entire_batch(self, scenario):
        missing = VenueId(uuid4())
        with pytest.raises(VenuesNotFoundError) as excinfo:
            scenario.service.bulk_create_venue_bookings(
                str(scenario.event_id),
                self.payload(scenario, scenario.venue.id, scenario.second_venue.id, missing),
                scenario.identity(),
            )
        assert excinfo.value.missing_venue_ids == (str(missing),)
        assert scenario.store.bookings == {}

    def test_creates_every_row_as_pending(self, scenario):
        created = scenario.service.bulk_create_venue_bookings(
            str(scenario.event_id),
            self.payload(scenario, scenario.venue.id, scenario.second_venue.id),
            scenario.identity(),
        )
        assert [booking.venue_id for booking in created] == [
            scenario.venue.id,
            scenario.second_venue.id,
        ]
        assert {booking.approval_status for booking in created} == {ApprovalStatus.PENDING}

    def test_rows_conflicting_with_each_other_roll_back(self, scenario):
        with pytest.raises(SchedulingConflictError):
            scenario.service.bulk_create_venue_bookings(
                str(scenario.event_id),
                self.payload(scenario, scenario.second_venue.id, scenario.venue.id, scenario.venue.id),
                scenario.identity(),
            )
        assert scenario.store.bookings == {}

    def test_body_organization_must_include_caller(self, scenario):
        with pytest.raises(ForbiddenError):
            scenario.service.bulk_create_venue_bookings(
                str(scenario.event_id),
                self.payload(
                    scenario,
                    scenario.venue.id,
                    organizationId=str(scenario.other_organization_id),
                ),
                scenario.identity(),
            )

    def test_bad_row_date_rejects_batch(self, scenario):
        data = self.payload(scenario, scenario.venue.id, scenario.second_venue.id)
        data["bookings"][1]["endDate"] = "2025-03-01"
        with pytest.raises(InvalidRangeError):
            scenario.service.bulk_create_venue_bookings(
                str(scenario.event_id), data, scenario.identity()
            )
        assert scenario.store.bookings == {}


class TestQueries:
    def test_list_for_unknown_event(self, scenario):
        with pytest.raises(EventNotFoundError):
            scenario.service.list_for_event(str(uuid4()))

    def test_list_by_status(self, scenario):
        approved = scenario.seed("09:00", "10:00", ApprovalStatus.APPROVED)
        scenario.seed("11:00", "12:00")
        assert [booking.id for booking in scenario.service.list_by_status("approved")] == [approved.id]

    def test_list_by_bad_status(self, scenario):
        with pytest.raises(InvalidStatusError):
            scenario.service.list_by_status("cancelled")

    def test_list_for_organizer_requires_user(self, scenario):
        with pytest.raises(UnauthenticatedError):
            scenario.service.list_for_organizer(Identity())

    def test_date_range_requires_both_dates(self, scenario):
        with pytest.raises(MissingFieldsError):
            scenario.service.list_by_date_range({"startDate": "2025-03-01"})

    def test_date_range_rejects_unknown_filter(self, scenario):
        with pytest.raises(InvalidValueError) as excinfo:
            scenario.service.list_by_date_range(
                {"startDate": "2025-03-01", "endDate": "2025-03-31", "filterType": "weeks"}
            )
        assert excinfo.value.code is ErrorCode.INVALID_VALUE

    def test_date_range_returns_contained_bookings(self, scenario):
        booking = scenario.seed()
        found = scenario.service.list_by_date_range({"startDate": "2025-03-01", "endDate": "2025-03-31"})
        assert [item.id for item in found] == [booking.id]
