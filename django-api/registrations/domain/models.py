"""Domain models for registrations and their credentials.

Django ORM models are in registrations/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from accounts.domain import UserId
from bookings.domain import VenueId
from events.domain import EventId, TicketTypeId
from registrations.domain.value_objects import PaymentStatus, RegistrationId, RegistrationState


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration."""

    id: RegistrationId
    event_id: EventId
    user_id: UserId
    buyer_id: UserId
    bought_for_ids: tuple[UserId, ...]
    ticket_type_id: TicketTypeId
    venue_id: VenueId
    no_of_tickets: int
    registration_date: datetime
    payment_status: PaymentStatus
    qr_code: str
    check_date: datetime | None
    attended: bool

    @property
    def participant_ids(self) -> frozenset[UserId]:
        """Everyone this registration admits or was bought by."""
        return frozenset({self.user_id, self.buyer_id, *self.bought_for_ids})

    @property
    def state(self) -> RegistrationState:
        return RegistrationState.ATTENDED if self.attended else RegistrationState.ACTIVE


@dataclass(frozen=True)
class NewRegistration:
    """Validated registration ready to be persisted."""

    id: RegistrationId
    event_id: EventId
    user_id: UserId
    buyer_id: UserId
    ticket_type_id: TicketTypeId
    venue_id: VenueId
    registration_date: datetime
    bought_for_ids: tuple[UserId, ...] = ()
    no_of_tickets: int = 1
    payment_status: PaymentStatus = PaymentStatus.PENDING


@dataclass(frozen=True)
class Credential:
    """A signed token bound to one registration, and its rendered QR artifact."""

    token: str
    registration_id: RegistrationId
    artifact_name: str
    issued_at: datetime
    revoked_at: datetime | None = None
    superseded_by: str | None = None

    @property
    def is_active(self) -> bool:
        return self.revoked_at is None


@dataclass(frozen=True)
class CredentialLocator:
    """Where a client finds the credential of a registration."""

    registration_id: RegistrationId
    token: str
    artifact_name: str
    url: str
    issued_at: datetime
