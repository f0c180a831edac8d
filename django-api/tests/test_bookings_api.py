"""Integration tests for the venue booking endpoints.

Run with: pytest tests/test_bookings_api.py -v
"""

from datetime import date, time
from decimal import Decimal
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from accounts.identity import Identity
from bookings.models import Venue, VenueBooking


def booking_body(event, venue, **overrides) -> dict:
    body = {
        "eventId": str(event.id),
        "venueId": str(venue.id),
        "startDate": "2025-03-10",
        "endDate": "2025-03-10",
        "startTime": "09:00",
        "endTime": "17:00",
    }
    body.update(overrides)
    return body


@pytest.mark.django_db
class TestCreateBooking:
    """Tests for POST /api/bookings"""

    def test_created_pending(self, auth_client: APIClient, event, venue, member, organization):
        response = auth_client.post(
            "/api/bookings", booking_body(event, venue, approvalStatus="approved"), format="json"
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["approvalStatus"] == "pending"
        assert data["organizerId"] == str(member.id)
        assert data["organizationId"] == str(organization.id)
        assert data["totalAmountDue"] == "150.00"
        assert data["venue"]["name"] == "Main Hall"
        assert VenueBooking.objects.count() == 1

    def test_unauthenticated(self, api_client: APIClient, event, venue):
        response = api_client.post("/api/bookings", booking_body(event, venue), format="json")
        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"
        assert VenueBooking.objects.count() == 0

    def test_foreign_organization(self, client_for, make_user, other_organization, organization, event, venue):
        outsider = make_user("outsider", other_organization)
        client = client_for(outsider, organization)
        response = client.post("/api/bookings", booking_body(event, venue), format="json")
        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"
        assert VenueBooking.objects.count() == 0

    def test_unknown_organization(self, member, event, venue):
        client = APIClient()
        client.force_authenticate(user=Identity(user_id=str(member.id), organization_id=str(uuid4())))
        response = client.post("/api/bookings", booking_body(event, venue), format="json")
        assert response.status_code == 404
        assert response.json()["code"] == "ORGANIZATION_NOT_FOUND"

    def test_start_after_end(self, auth_client: APIClient, event, venue):
        response = auth_client.post(
            "/api/bookings",
            booking_body(event, venue, startDate="2025-03-10", endDate="2025-03-09"),
            format="json",
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "INVALID_RANGE"
        assert body["message"] == "Start date cannot be after end date"
        assert VenueBooking.objects.count() == 0

    def test_missing_fields(self, auth_client: APIClient, event):
        response = auth_client.post("/api/bookings", {"eventId": str(event.id)}, format="json")
        assert response.status_code == 400
        assert response.json()["details"]["fields"] == [
            "venueId",
            "startDate",
            "endDate",
            "startTime",
            "endTime",
        ]

    def test_malformed_venue_id(self, auth_client: APIClient, event, venue):
        response = auth_client.post(
            "/api/bookings", booking_body(event, venue, venueId="hall-1"), format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_IDENTIFIER"

    def test_unknown_venue(self, auth_client: APIClient, event, venue):
        response = auth_client.post(
            "/api/bookings", booking_body(event, venue, venueId=str(uuid4())), format="json"
        )
        assert response.status_code == 404

    def test_conflict_with_pending_booking(self, auth_client: APIClient, make_booking, event, venue):
        existing = make_booking(start_time=time(10, 0), end_time=time(12, 0))
        response = auth_client.post(
            "/api/bookings",
            booking_body(event, venue, startTime="11:00", endTime="13:00"),
            format="json",
        )
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "SCHEDULING_CONFLICT"
        assert body["details"]["conflictingBookingId"] == str(existing.id)
        assert VenueBooking.objects.count() == 1

    def test_rejected_booking_does_not_block(self, auth_client: APIClient, make_booking, event, venue):
        make_booking(approval_status="rejected")
        response = auth_client.post("/api/bookings", booking_body(event, venue), format="json")
        assert response.status_code == 201

    def test_adjacent_window_is_accepted(self, auth_client: APIClient, make_booking, event, venue):
        make_booking(start_time=time(9, 0), end_time=time(12, 0))
        response = auth_client.post(
            "/api/bookings",
            booking_body(event, venue, startTime="12:00", endTime="15:00"),
            format="json",
        )
        assert response.status_code == 201

    def test_overnight_booking_holds_the_next_morning(self, auth_client: APIClient, make_booking, event, venue):
        existing = make_booking(start_time=time(22, 0), end_time=time(2, 0))
        next_morning = booking_body(
            event, venue, startDate="2025-03-11", endDate="2025-03-11", startTime="00:30", endTime="01:00"
        )
        response = auth_client.post("/api/bookings", next_morning, format="json")
        assert response.status_code == 400
        assert response.json()["details"]["conflictingBookingId"] == str(existing.id)

    def test_overnight_booking_leaves_its_start_morning_free(
        self, auth_client: APIClient, make_booking, event, venue
    ):
        make_booking(start_time=time(22, 0), end_time=time(2, 0))
        response = auth_client.post(
            "/api/bookings",
            booking_body(event, venue, startTime="00:30", endTime="01:00"),
            format="json",
        )
        assert response.status_code == 201


@pytest.mark.django_db
class TestBookingDetail:
    """Tests for /api/bookings/{id} and /api/bookings/{id}/status"""

    def test_get(self, api_client: APIClient, make_booking):
        booking = make_booking()
        response = api_client.get(f"/api/bookings/{booking.id}")
        assert response.status_code == 200
        assert response.json()["data"]["bookingId"] == str(booking.id)

    def test_get_not_found(self, api_client: APIClient):
        assert api_client.get(f"/api/bookings/{uuid4()}").status_code == 404

    def test_update_moves_window_and_resets_status(self, auth_client: APIClient, make_booking):
        booking = make_booking(approval_status="approved")
        response = auth_client.put(
            f"/api/bookings/{booking.id}",
            {"startTime": "18:00", "endTime": "20:00"},
            format="json",
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["startTime"] == "18:00:00"
        assert data["approvalStatus"] == "pending"

    def test_update_to_another_venue_takes_its_price(self, auth_client: APIClient, make_booking, organization):
        booking = make_booking()
        annex = Venue.objects.create(
            name="Annex", location="Kigali", capacity=40, amount=Decimal("60.00"), organization=organization
        )
        response = auth_client.put(
            f"/api/bookings/{booking.id}", {"venueId": str(annex.id)}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["data"]["totalAmountDue"] == "60.00"

    def test_status_update(self, auth_client: APIClient, make_booking):
        booking = make_booking()
        response = auth_client.patch(
            f"/api/bookings/{booking.id}/status", {"approvalStatus": "approved"}, format="json"
        )
        assert response.status_code == 200
        booking.refresh_from_db()
        assert booking.approval_status == "approved"

    def test_status_outside_enumeration(self, auth_client: APIClient, make_booking):
        booking = make_booking()
        response = auth_client.patch(
            f"/api/bookings/{booking.id}/status", {"approvalStatus": "cancelled"}, format="json"
        )
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_STATUS"
        assert body["details"]["allowed"] == ["pending", "approved", "rejected"]
        booking.refresh_from_db()
        assert booking.approval_status == "pending"

    def test_reinstating_a_rejected_booking_checks_conflicts(self, auth_client: APIClient, make_booking):
        rejected = make_booking(approval_status="rejected")
        make_booking(approval_status="approved")
        response = auth_client.patch(
            f"/api/bookings/{rejected.id}/status", {"approvalStatus": "pending"}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "SCHEDULING_CONFLICT"

    def test_delete(self, auth_client: APIClient, make_booking):
        booking = make_booking()
        assert auth_client.delete(f"/api/bookings/{booking.id}").status_code == 200
        assert not VenueBooking.objects.filter(pk=booking.pk).exists()


@pytest.mark.django_db
class TestBulkCreate:
    """Tests for POST /api/events/{id}/bookings/bulk"""

    def rows(self, *venues) -> list[dict]:
        return [
            {
                "venueId": str(venue_id),
                "startDate": "2025-04-01",
                "endDate": "2025-04-01",
                "startTime": "09:00",
                "endTime": "11:00",
            }
            for venue_id in venues
        ]

    def test_creates_every_row(self, auth_client: APIClient, event, venue, organization):
        annex = Venue.objects.create(
            name="Annex", location="Kigali", capacity=40, amount=Decimal("60.00"), organization=organization
        )
        response = auth_client.post(
            f"/api/events/{event.id}/bookings/bulk",
            {"organizationId": str(organization.id), "bookings": self.rows(venue.id, annex.id)},
            format="json",
        )
        assert response.status_code == 201
        assert len(response.json()["data"]) == 2
        assert VenueBooking.objects.filter(event=event).count() == 2

    def test_missing_venue_writes_nothing(self, auth_client: APIClient, event, venue, organization):
        unknown = uuid4()
        response = auth_client.post(
            f"/api/events/{event.id}/bookings/bulk",
            {"organizationId": str(organization.id), "bookings": self.rows(venue.id, unknown)},
            format="json",
        )
        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "VENUES_NOT_FOUND"
        assert body["details"]["venueIds"] == [str(unknown)]
        assert VenueBooking.objects.count() == 0

    def test_conflict_inside_the_batch_writes_nothing(self, auth_client: APIClient, event, venue, organization):
        response = auth_client.post(
            f"/api/events/{event.id}/bookings/bulk",
            {"organizationId": str(organization.id), "bookings": self.rows(venue.id, venue.id)},
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["code"] == "SCHEDULING_CONFLICT"
        assert VenueBooking.objects.count() == 0

    def test_requires_organization(self, auth_client: APIClient, event, venue):
        response = auth_client.post(
            f"/api/events/{event.id}/bookings/bulk", {"bookings": self.rows(venue.id)}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["details"]["fields"] == ["organizationId"]


@pytest.mark.django_db
class TestBookingQueries:
    def test_list_empty(self, api_client: APIClient):
        response = api_client.get("/api/bookings")
        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_for_event(self, api_client: APIClient, make_booking, event):
        booking = make_booking()
        response = api_client.get(f"/api/events/{event.id}/bookings")
        assert [item["bookingId"] for item in response.json()["data"]] == [str(booking.id)]

    def test_for_unknown_venue(self, api_client: APIClient):
        assert api_client.get(f"/api/venues/{uuid4()}/bookings").status_code == 404

    def test_for_organization(self, api_client: APIClient, make_booking, organization, other_organization):
        make_booking()
        assert len(api_client.get(f"/api/organizations/{organization.id}/bookings").json()["data"]) == 1
        assert api_client.get(f"/api/organizations/{other_organization.id}/bookings").json()["data"] == []

    def test_for_organizer(self, auth_client: APIClient, make_booking):
        make_booking()
        response = auth_client.get("/api/bookings/organizer")
        assert len(response.json()["data"]) == 1

    def test_by_status(self, api_client: APIClient, make_booking):
        make_booking(approval_status="approved")
        make_booking(start_date=date(2025, 3, 11), end_date=date(2025, 3, 11))
        response = api_client.get("/api/bookings/status/approved")
        assert [item["approvalStatus"] for item in response.json()["data"]] == ["approved"]

    def test_by_unknown_status(self, api_client: APIClient):
        assert api_client.get("/api/bookings/status/cancelled").status_code == 400

    def test_date_range(self, api_client: APIClient, make_booking):
        inside = make_booking(start_date=date(2025, 3, 10), end_date=date(2025, 3, 11))
        make_booking(start_date=date(2025, 3, 20), end_date=date(2025, 3, 21))
        response = api_client.get(
            "/api/bookings/date-range", {"startDate": "2025-03-01", "endDate": "2025-03-15"}
        )
        assert response.status_code == 200
        assert [item["bookingId"] for item in response.json()["data"]] == [str(inside.id)]

    def test_date_range_by_start_hour(self, api_client: APIClient, make_booking):
        morning = make_booking(start_time=time(9, 0), end_time=time(10, 0))
        make_booking(start_time=time(15, 0), end_time=time(16, 0))
        response = api_client.get(
            "/api/bookings/date-range",
            {
                "startDate": "2025-03-01",
                "endDate": "2025-03-31",
                "filterType": "hours",
                "rangeStart": 8,
                "rangeEnd": 11,
            },
        )
        assert [item["bookingId"] for item in response.json()["data"]] == [str(morning.id)]

    def test_date_range_unknown_filter(self, api_client: APIClient):
        response = api_client.get(
            "/api/bookings/date-range",
            {"startDate": "2025-03-01", "endDate": "2025-03-31", "filterType": "weeks"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_VALUE"
