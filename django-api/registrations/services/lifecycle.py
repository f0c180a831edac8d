"""Registration lifecycle: register, resolve and rotate credentials, check in.

A registration is created active with a live credential. Regeneration swaps
the credential and leaves the state alone; check-in moves it to attended and
nothing moves it back.
"""

import logging
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from django.core.files import File
from django.utils import timezone

from accounts.domain import UserId
from accounts.identity import Identity
from bookings.domain import VenueId
from common.dates import parse_request_datetime
from common.errors import (
    DomainError,
    InvalidStatusError,
    InvalidValueError,
    MissingFieldsError,
    NotFoundError,
    UnauthenticatedError,
)
from common.validation import require_fields
from common.value_objects import parse_identifier
from events.domain import EventId, TicketTypeId
from events.domain.errors import EventNotFoundError
from registrations.domain import (
    CredentialLocator,
    NewRegistration,
    PaymentStatus,
    Registration,
    RegistrationId,
)
from registrations.domain.errors import (
    AlreadyCheckedInError,
    DuplicateRegistrationError,
    InvalidCredentialError,
    RegistrationNotFoundError,
)
from registrations.services.credentials import CredentialIssuer
from registrations.stores.interfaces import RegistrationChanges, RegistrationStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("eventId", "userId", "ticketTypeId", "venueId")
UPDATABLE_FIELDS = ("paymentStatus", "noOfTickets", "boughtForIds", "ticketTypeId", "venueId")


class RegistrationLifecycle:
    """Service for registrations and their QR credentials."""

    def __init__(self, store: RegistrationStore, issuer: CredentialIssuer) -> None:
        self._store = store
        self._issuer = issuer

    def register(self, data: Mapping[str, Any], identity: Identity) -> Registration:
        """Register an attendee, bought by the caller.

        The duplicate check covers the attendee, the buyer and every
        beneficiary, and runs before any credential is issued.

        Raises:
            UnauthenticatedError: If there is no calling user.
            MissingFieldsError: If a required field is absent.
            InvalidIdentifierError: If an id is not a version-4 UUID.
            DuplicateRegistrationError: If a participant is already registered.
            MissingRelatedEntityError: If a referenced row is gone at commit.
        """
        if not identity.user_id:
            raise UnauthenticatedError()
        buyer_id = parse_identifier(UserId, identity.user_id, "buyerId")
        require_fields(data, REQUIRED_FIELDS)

        event_id = parse_identifier(EventId, data["eventId"], "eventId")
        user_id = parse_identifier(UserId, data["userId"], "userId")
        ticket_type_id = parse_identifier(TicketTypeId, data["ticketTypeId"], "ticketTypeId")
        venue_id = parse_identifier(VenueId, data["venueId"], "venueId")
        bought_for_ids = self._parse_beneficiaries(data.get("boughtForIds"))
        no_of_tickets = self._parse_ticket_count(data.get("noOfTickets"))
        payment_status = self._parse_payment_status(data.get("paymentStatus"))
        registration_date = (
            parse_request_datetime(data["registrationDate"], "registrationDate")
            if data.get("registrationDate")
            else timezone.now()
        )

        participants = {user_id, buyer_id, *bought_for_ids}
        already = participants & self._store.participants_for_event(event_id)
        if already:
            logger.info("Duplicate registration for event %s rejected", event_id)
            raise DuplicateRegistrationError([str(participant) for participant in already])

        registration_id = RegistrationId(uuid4())
        credential = self._issuer.issue(registration_id, user_id, event_id)
        try:
            registration = self._store.create_registration(
                NewRegistration(
                    id=registration_id,
                    event_id=event_id,
                    user_id=user_id,
                    buyer_id=buyer_id,
                    ticket_type_id=ticket_type_id,
                    venue_id=venue_id,
                    registration_date=registration_date,
                    bought_for_ids=bought_for_ids,
                    no_of_tickets=no_of_tickets,
                    payment_status=payment_status,
                ),
                credential,
            )
        except DomainError:
            self._issuer.discard(credential.artifact_name)
            raise

        logger.info("Registration %s created for user %s on event %s", registration.id, user_id, event_id)
        return registration

    def resolve_credential(self, raw: str) -> Registration:
        """Return the registration a presented credential belongs to.

        Read-only; resolving the same credential twice gives the same result.
        """
        registration_id = self._issuer.decode(raw)
        registration = self._store.get_registration(registration_id)
        if registration is None:
            raise RegistrationNotFoundError(str(registration_id))
        credential = self._store.get_credential(raw)
        if credential is None or credential.registration_id != registration_id:
            raise InvalidCredentialError()
        if not credential.is_active:
            logger.info("Superseded credential presented for registration %s", registration_id)
            raise InvalidCredentialError("QR code has been replaced by a newer one")
        return registration

    def regenerate_credential(self, registration_id: str) -> Registration:
        """Issue a new credential; the previous one stops resolving."""
        registration = self.get(registration_id)
        credential = self._issuer.issue(registration.id, registration.user_id, registration.event_id)
        try:
            rotated = self._store.rotate_credential(registration.id, credential)
        except DomainError:
            self._issuer.discard(credential.artifact_name)
            raise
        if rotated is None:
            self._issuer.discard(credential.artifact_name)
            raise RegistrationNotFoundError(registration_id)

        updated, replaced_artifact = rotated
        self._issuer.discard(replaced_artifact)
        logger.info("Credential for registration %s regenerated", registration.id)
        return updated

    def check_in(self, registration_id: str) -> Registration:
        """Mark a registration attended."""
        registration = self.get(registration_id)
        if registration.attended:
            raise AlreadyCheckedInError(registration_id)
        updated = self._store.mark_attended(registration.id, timezone.now())
        if updated is None:
            # Lost a race with another check-in, or the row was deleted.
            self.get(registration_id)
            raise AlreadyCheckedInError(registration_id)
        logger.info("Registration %s checked in", registration.id)
        return updated

    def get(self, registration_id: str) -> Registration:
        registration = self._store.get_registration(self._parse_id(registration_id))
        if registration is None:
            raise RegistrationNotFoundError(registration_id)
        return registration

    def update(self, registration_id: str, data: Mapping[str, Any]) -> Registration:
        """Apply a partial update to what was bought.

        Attendance and the credential are not editable here; use check_in and
        regenerate_credential. New beneficiaries go through the duplicate
        check against every other registration of the event.
        """
        existing = self.get(registration_id)
        if not any(name in data for name in UPDATABLE_FIELDS):
            raise MissingFieldsError(list(UPDATABLE_FIELDS))

        ticket_type_id = None
        if "ticketTypeId" in data:
            ticket_type_id = parse_identifier(TicketTypeId, data["ticketTypeId"], "ticketTypeId")
        venue_id = None
        if "venueId" in data:
            venue_id = parse_identifier(VenueId, data["venueId"], "venueId")
        bought_for_ids = None
        if "boughtForIds" in data:
            bought_for_ids = self._parse_beneficiaries(data["boughtForIds"])
        no_of_tickets = None
        if "noOfTickets" in data:
            no_of_tickets = self._parse_ticket_count(data["noOfTickets"])
        payment_status = None
        if "paymentStatus" in data:
            payment_status = self._parse_payment_status(data["paymentStatus"])

        if bought_for_ids is not None and set(bought_for_ids) - existing.participant_ids:
            participants = {existing.user_id, existing.buyer_id, *bought_for_ids}
            already = participants & self._store.participants_for_event(
                existing.event_id, exclude=existing.id
            )
            if already:
                logger.info("Beneficiary change on registration %s rejected as duplicate", existing.id)
                raise DuplicateRegistrationError([str(participant) for participant in already])

        updated = self._store.update_registration(
            existing.id,
            RegistrationChanges(
                ticket_type_id=ticket_type_id,
                venue_id=venue_id,
                bought_for_ids=bought_for_ids,
                no_of_tickets=no_of_tickets,
                payment_status=payment_status,
            ),
        )
        if updated is None:
            raise RegistrationNotFoundError(registration_id)
        logger.info("Registration %s updated, payment %s", updated.id, updated.payment_status.value)
        return updated

    def list_registrations(self) -> list[Registration]:
        return self._store.list_registrations()

    def list_for_event(self, event_id: str) -> list[Registration]:
        parsed = parse_identifier(EventId, event_id, "eventId")
        if not self._store.event_exists(parsed):
            raise EventNotFoundError(event_id)
        return self._store.list_registrations(parsed)

    def credential_locator(self, registration_id: str) -> CredentialLocator:
        registration = self.get(registration_id)
        credential = self._store.current_credential(registration.id)
        if credential is None:
            raise NotFoundError("QR code", registration_id)
        return CredentialLocator(
            registration_id=registration.id,
            token=credential.token,
            artifact_name=credential.artifact_name,
            url=self._issuer.url(credential.artifact_name),
            issued_at=credential.issued_at,
        )

    def open_credential_image(self, registration_id: str) -> File:
        registration = self.get(registration_id)
        if not self._issuer.exists(registration.qr_code):
            raise NotFoundError("QR code image", registration_id)
        return self._issuer.open(registration.qr_code)

    def delete(self, registration_id: str) -> None:
        registration = self.get(registration_id)
        if not self._store.delete_registration(registration.id):
            raise RegistrationNotFoundError(registration_id)
        self._issuer.discard(registration.qr_code)
        logger.info("Registration %s deleted", registration.id)

    @staticmethod
    def _parse_id(registration_id: str) -> RegistrationId:
        return parse_identifier(RegistrationId, registration_id, "registrationId")

    @staticmethod
    def _parse_beneficiaries(value: object) -> tuple[UserId, ...]:
        if value in (None, ""):
            return ()
        if not isinstance(value, list):
            raise InvalidValueError("boughtForIds", "must be a list of user ids")
        parsed = []
        for item in value:
            user_id = parse_identifier(UserId, item, "boughtForIds")
            if user_id not in parsed:
                parsed.append(user_id)
        return tuple(parsed)

    @staticmethod
    def _parse_ticket_count(value: object) -> int:
        if value in (None, ""):
            return 1
        try:
            count = int(value)
        except (TypeError, ValueError):
            raise InvalidValueError("noOfTickets", "must be a positive integer") from None
        if count < 1:
            raise InvalidValueError("noOfTickets", "must be a positive integer")
        return count

    @staticmethod
    def _parse_payment_status(value: object) -> PaymentStatus:
        if value in (None, ""):
            return PaymentStatus.PENDING
        try:
            return PaymentStatus(value)
        except (TypeError, ValueError):
            raise InvalidStatusError(value, PaymentStatus.values()) from None
