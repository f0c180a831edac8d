"""Unit tests for EventService.

These test error handling and domain error mapping.
Run with: pytest tests/test_event_service.py -v
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from accounts.domain import OrganizationId, UserId
from accounts.identity import Identity
from common.errors import (
    ForbiddenError,
    InvalidIdentifierError,
    InvalidRangeError,
    InvalidStatusError,
    InvalidValueError,
    MissingFieldsError,
    UnauthenticatedError,
)
from events.domain import EventStatus
from events.domain.errors import EventNotFoundError
from events.services import EventService
from tests.fakes import InMemoryDirectoryStore, InMemoryEventStore


@pytest.fixture
def directory() -> InMemoryDirectoryStore:
    return InMemoryDirectoryStore()


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def service(store, directory) -> EventService:
    return EventService(store, directory)


@pytest.fixture
def organizer(directory) -> Identity:
    organization_id = OrganizationId(uuid4())
    user_id = UserId(uuid4())
    directory.add_organization(organization_id)
    directory.add_member(user_id, organization_id)
    return Identity(user_id=str(user_id), organization_id=str(organization_id))


@pytest.fixture
def event(service, organizer):
    return service.create_event({"name": "Jazz Night"}, organizer)


class TestEventService:
    """Tests for EventService."""

    def test_get_event_invalid_id_raises_error(self, service):
        with pytest.raises(InvalidIdentifierError):
            service.get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self, service):
        with pytest.raises(EventNotFoundError):
            service.get_event(str(uuid4()))

    def test_list_ticket_types_invalid_id_raises_error(self, service):
        with pytest.raises(InvalidIdentifierError):
            service.list_ticket_types("42")

    def test_list_ticket_types_event_not_found_raises_error(self, service):
        with pytest.raises(EventNotFoundError):
            service.list_ticket_types(str(uuid4()))

    def test_delete_unknown_event(self, service):
        with pytest.raises(EventNotFoundError):
            service.delete_event(str(uuid4()))


class TestCreateEvent:
    def test_created_pending_for_the_caller(self, service, organizer):
        event = service.create_event(
            {"name": "  Jazz Night ", "startDate": "2025-03-10", "endDate": "2025-03-11"}, organizer
        )
        assert event.name == "Jazz Night"
        assert event.status is EventStatus.PENDING
        assert str(event.organizer_id) == organizer.user_id
        assert event.start_date == date(2025, 3, 10)

    def test_requires_identity(self, service):
        with pytest.raises(UnauthenticatedError):
            service.create_event({"name": "Jazz Night"}, Identity())

    def test_requires_membership(self, service, directory, organizer):
        stranger = UserId(uuid4())
        directory.add_member(stranger)
        identity = Identity(user_id=str(stranger), organization_id=organizer.organization_id)
        with pytest.raises(ForbiddenError):
            service.create_event({"name": "Jazz Night"}, identity)

    def test_requires_name(self, service, organizer):
        with pytest.raises(MissingFieldsError):
            service.create_event({"name": "   "}, organizer)

    def test_rejects_reversed_dates(self, service, organizer):
        with pytest.raises(InvalidRangeError):
            service.create_event(
                {"name": "Jazz Night", "startDate": "2025-03-12", "endDate": "2025-03-10"}, organizer
            )


class TestUpdateEvent:
    def test_edit_resets_to_pending(self, service, event):
        service.approve_event(str(event.id))
        updated = service.update_event(str(event.id), {"description": "Late set"})
        assert updated.description == "Late set"
        assert updated.status is EventStatus.PENDING

    def test_requires_an_editable_field(self, service, event):
        with pytest.raises(MissingFieldsError):
            service.update_event(str(event.id), {"status": "approved"})

    def test_blank_name(self, service, event):
        with pytest.raises(InvalidValueError):
            service.update_event(str(event.id), {"name": ""})

    def test_range_checked_against_stored_dates(self, service, organizer):
        event = service.create_event({"name": "Fair", "endDate": "2025-03-10"}, organizer)
        with pytest.raises(InvalidRangeError):
            service.update_event(str(event.id), {"startDate": "2025-03-11"})


class TestTransitions:
    def test_approve_then_cancel(self, service, event):
        assert service.approve_event(str(event.id)).status is EventStatus.APPROVED
        assert service.cancel_event(str(event.id)).status is EventStatus.CANCELLED

    def test_cancelled_is_terminal(self, service, event):
        service.cancel_event(str(event.id))
        with pytest.raises(InvalidStatusError) as excinfo:
            service.approve_event(str(event.id))
        assert excinfo.value.details == {"allowed": []}

    def test_rejected_can_be_approved(self, service, event):
        service.reject_event(str(event.id))
        assert service.approve_event(str(event.id)).status is EventStatus.APPROVED


class TestTicketTypes:
    def test_create_and_list(self, service, event):
        created = service.create_ticket_type(
            str(event.id), {"name": "VIP", "price": "45.50", "quantity": 20}
        )
        assert created.price.amount == Decimal("45.50")
        assert service.list_ticket_types(str(event.id)) == [created]
        assert service.get_event(str(event.id)).ticket_types == (created,)

    def test_missing_fields(self, service, event):
        with pytest.raises(MissingFieldsError) as excinfo:
            service.create_ticket_type(str(event.id), {"name": "VIP"})
        assert excinfo.value.fields == ("price", "quantity")

    @pytest.mark.parametrize(
        "field, data",
        [
            ("price", {"name": "VIP", "price": "-1", "quantity": 5}),
            ("price", {"name": "VIP", "price": "free", "quantity": 5}),
            ("quantity", {"name": "VIP", "price": "5", "quantity": -3}),
            ("quantity", {"name": "VIP", "price": "5", "quantity": "lots"}),
        ],
    )
    def test_invalid_values(self, service, event, field, data):
        with pytest.raises(InvalidValueError) as excinfo:
            service.create_ticket_type(str(event.id), data)
        assert excinfo.value.field_name == field
