"""Pytest configuration and shared fixtures."""

from datetime import date, time
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.identity import Identity
from accounts.models import Organization, User
from bookings.models import Venue, VenueBooking
from events.models import Event, TicketType


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


@pytest.fixture
def organization(db) -> Organization:
    return Organization.objects.create(name="Kigali Arts", contact_email="arts@example.com")


@pytest.fixture
def other_organization(db) -> Organization:
    return Organization.objects.create(name="Musanze Sports", contact_email="sports@example.com")


@pytest.fixture
def make_user(db):
    def _make_user(username: str, *organizations: Organization) -> User:
        user = User.objects.create(username=username, email=f"{username}@example.com")
        user.organizations.set(organizations)
        return user

    return _make_user


@pytest.fixture
def member(make_user, organization) -> User:
    return make_user("organizer", organization)


@pytest.fixture
def event(member, organization) -> Event:
    return Event.objects.create(name="Jazz Night", organizer=member, organization=organization)


@pytest.fixture
def venue(organization) -> Venue:
    return Venue.objects.create(
        name="Main Hall",
        location="Kigali",
        capacity=300,
        amount=Decimal("150.00"),
        organization=organization,
    )


@pytest.fixture
def ticket_type(event) -> TicketType:
    return TicketType.objects.create(event=event, name="General", price=Decimal("10.00"), quantity=100)


@pytest.fixture
def make_booking(event, venue, member, organization):
    def _make_booking(
        start_date: date = date(2025, 3, 10),
        end_date: date = date(2025, 3, 10),
        start_time: time = time(9, 0),
        end_time: time = time(17, 0),
        approval_status: str = "pending",
        **overrides,
    ) -> VenueBooking:
        fields = {
            "event": event,
            "venue": venue,
            "organizer": member,
            "organization": organization,
            "start_date": start_date,
            "end_date": end_date,
            "start_time": start_time,
            "end_time": end_time,
            "approval_status": approval_status,
            "total_amount_due": venue.amount,
        }
        fields.update(overrides)
        return VenueBooking.objects.create(**fields)

    return _make_booking


def identity_for(user: User, organization: Organization | None = None) -> Identity:
    return Identity(
        user_id=str(user.id),
        organization_id=str(organization.id) if organization else None,
        organizations=tuple(str(org.id) for org in user.organizations.all()),
    )


@pytest.fixture
def client_for():
    """Build a client authenticated as a user acting for an organization."""

    def _client_for(user: User, organization: Organization | None = None) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=identity_for(user, organization))
        return client

    return _client_for


@pytest.fixture
def auth_client(client_for, member, organization) -> APIClient:
    """Client acting as the organizer for their organization."""
    return client_for(member, organization)
