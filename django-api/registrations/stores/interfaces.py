"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from accounts.domain import UserId
from bookings.domain import VenueId
from events.domain import EventId, TicketTypeId
from registrations.domain import (
    Credential,
    NewRegistration,
    PaymentStatus,
    Registration,
    RegistrationId,
)


@dataclass(frozen=True)
class RegistrationChanges:
    """Fields to apply to an existing registration. None leaves a field as is."""

    ticket_type_id: TicketTypeId | None = None
    venue_id: VenueId | None = None
    bought_for_ids: tuple[UserId, ...] | None = None
    no_of_tickets: int | None = None
    payment_status: PaymentStatus | None = None


class RegistrationStore(ABC):
    """Interface for registration and credential persistence."""

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def participants_for_event(
        self, event_id: EventId, exclude: RegistrationId | None = None
    ) -> set[UserId]:
        """Every attendee, buyer and beneficiary already registered for an event."""
        ...

    @abstractmethod
    def create_registration(
        self, new_registration: NewRegistration, credential: Credential
    ) -> Registration:
        """Persist a registration together with its first credential.

        Raises:
            MissingRelatedEntityError: If a referenced row no longer exists.
            DuplicateRegistrationError: If the attendee is already registered.
        """
        ...

    @abstractmethod
    def get_registration(self, registration_id: RegistrationId) -> Registration | None:
        """Return a registration by ID, or None if not found."""
        ...

    @abstractmethod
    def update_registration(
        self, registration_id: RegistrationId, changes: RegistrationChanges
    ) -> Registration | None:
        """Apply changes; return None if the registration does not exist.

        Raises:
            MissingRelatedEntityError: If a referenced ticket type or venue is gone.
        """
        ...

    @abstractmethod
    def list_registrations(self, event_id: EventId | None = None) -> list[Registration]:
        """Return registrations, optionally only those of one event."""
        ...

    @abstractmethod
    def delete_registration(self, registration_id: RegistrationId) -> bool:
        """Delete a registration and its credentials; False if it did not exist."""
        ...

    @abstractmethod
    def get_credential(self, token: str) -> Credential | None:
        """Return the credential record for a token, revoked or not."""
        ...

    @abstractmethod
    def current_credential(self, registration_id: RegistrationId) -> Credential | None:
        """Return the live credential of a registration."""
        ...

    @abstractmethod
    def rotate_credential(
        self, registration_id: RegistrationId, credential: Credential
    ) -> tuple[Registration, str] | None:
        """Make credential the live one and revoke every earlier one.

        Returns the updated registration and the artifact name it held
        before, read under the row lock, or None if it does not exist.
        """
        ...

    @abstractmethod
    def mark_attended(
        self, registration_id: RegistrationId, check_date: datetime
    ) -> Registration | None:
        """Record attendance; return None if the registration does not exist."""
        ...
