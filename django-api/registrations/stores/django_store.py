"""Django ORM implementation of the RegistrationStore."""

import logging
from datetime import datetime
from uuid import UUID

from django.db import DatabaseError, IntegrityError, transaction

from accounts.domain import UserId
from accounts.models import User
from bookings.domain import VenueId
from bookings.models import Venue
from common.errors import DomainError, StoreFailureError
from events.domain import EventId, TicketTypeId
from events.models import Event, TicketType
from registrations import models
from registrations.domain import (
    Credential,
    NewRegistration,
    PaymentStatus,
    Registration,
    RegistrationId,
)
from registrations.domain.errors import DuplicateRegistrationError, MissingRelatedEntityError
from registrations.stores.interfaces import RegistrationChanges, RegistrationStore

logger = logging.getLogger(__name__)


def _missing_related(related) -> str | None:
    """Name the first (entity, model, id) entry whose row does not exist."""
    for entity, model, identifier in related:
        if not model.objects.filter(pk=identifier.value).exists():
            return entity
    return None


def _ensure_related(related) -> None:
    missing = _missing_related(related)
    if missing is not None:
        raise MissingRelatedEntityError(missing)


def to_registration(row: models.Registration) -> Registration:
    return Registration(
        id=RegistrationId(row.id),
        event_id=EventId(row.event_id),
        user_id=UserId(row.user_id),
        buyer_id=UserId(row.buyer_id),
        bought_for_ids=tuple(UserId(UUID(value)) for value in row.bought_for_ids),
        ticket_type_id=TicketTypeId(row.ticket_type_id),
        venue_id=VenueId(row.venue_id),
        no_of_tickets=row.no_of_tickets,
        registration_date=row.registration_date,
        payment_status=PaymentStatus(row.payment_status),
        qr_code=row.qr_code,
        check_date=row.check_date,
        attended=row.attended,
    )


def to_credential(row: models.RegistrationCredential) -> Credential:
    return Credential(
        token=row.token,
        registration_id=RegistrationId(row.registration_id),
        artifact_name=row.artifact_name,
        issued_at=row.issued_at,
        revoked_at=row.revoked_at,
        superseded_by=row.superseded_by.token if row.superseded_by_id else None,
    )


class DjangoRegistrationStore(RegistrationStore):
    """Database-backed registration store using Django ORM."""

    def event_exists(self, event_id: EventId) -> bool:
        try:
            return Event.objects.filter(pk=event_id.value).exists()
        except DatabaseError as exc:
            raise StoreFailureError("event_exists") from exc

    def participants_for_event(
        self, event_id: EventId, exclude: RegistrationId | None = None
    ) -> set[UserId]:
        try:
            rows = models.Registration.objects.filter(event_id=event_id.value)
            if exclude is not None:
                rows = rows.exclude(pk=exclude.value)
            rows = rows.values_list("user_id", "buyer_id", "bought_for_ids")
            participants: set[UserId] = set()
            for user_id, buyer_id, bought_for_ids in rows:
                participants.add(UserId(user_id))
                participants.add(UserId(buyer_id))
                participants.update(UserId(UUID(value)) for value in bought_for_ids)
            return participants
        except DatabaseError as exc:
            raise StoreFailureError("participants_for_event") from exc

    def create_registration(
        self, new_registration: NewRegistration, credential: Credential
    ) -> Registration:
        related = [
            ("event", Event, new_registration.event_id),
            ("user", User, new_registration.user_id),
            ("buyer", User, new_registration.buyer_id),
            ("ticket type", TicketType, new_registration.ticket_type_id),
            ("venue", Venue, new_registration.venue_id),
        ]
        try:
            with transaction.atomic():
                _ensure_related(related)
                row = models.Registration.objects.create(
                    id=new_registration.id.value,
                    event_id=new_registration.event_id.value,
                    user_id=new_registration.user_id.value,
                    buyer_id=new_registration.buyer_id.value,
                    bought_for_ids=[str(user_id) for user_id in new_registration.bought_for_ids],
                    ticket_type_id=new_registration.ticket_type_id.value,
                    venue_id=new_registration.venue_id.value,
                    no_of_tickets=new_registration.no_of_tickets,
                    registration_date=new_registration.registration_date,
                    payment_status=new_registration.payment_status.value,
                    qr_code=credential.artifact_name,
                )
                models.RegistrationCredential.objects.create(
                    token=credential.token,
                    registration=row,
                    artifact_name=credential.artifact_name,
                    issued_at=credential.issued_at,
                )
        except IntegrityError as exc:
            raise self._explain_integrity_error(new_registration, related) from exc
        except DatabaseError as exc:
            raise StoreFailureError("create_registration") from exc
        return to_registration(row)

    @staticmethod
    def _explain_integrity_error(new_registration: NewRegistration, related: list) -> DomainError:
        """Work out which constraint a rolled-back insert ran into.

        Only the (event, user) unique constraint is a duplicate; a related row
        deleted after the existence checks is a missing related entity.
        """
        try:
            duplicate = models.Registration.objects.filter(
                event_id=new_registration.event_id.value,
                user_id=new_registration.user_id.value,
            ).exists()
            missing = _missing_related(related)
        except DatabaseError:
            logger.exception("Could not inspect failed registration insert")
            return StoreFailureError("create_registration")
        if duplicate:
            return DuplicateRegistrationError([str(new_registration.user_id)])
        if missing is not None:
            return MissingRelatedEntityError(missing)
        return StoreFailureError("create_registration")

    def get_registration(self, registration_id: RegistrationId) -> Registration | None:
        try:
            row = models.Registration.objects.filter(pk=registration_id.value).first()
        except DatabaseError as exc:
            raise StoreFailureError("get_registration") from exc
        return to_registration(row) if row is not None else None

    def update_registration(
        self, registration_id: RegistrationId, changes: RegistrationChanges
    ) -> Registration | None:
        related = []
        if changes.ticket_type_id is not None:
            related.append(("ticket type", TicketType, changes.ticket_type_id))
        if changes.venue_id is not None:
            related.append(("venue", Venue, changes.venue_id))
        try:
            with transaction.atomic():
                row = (
                    models.Registration.objects.select_for_update()
                    .filter(pk=registration_id.value)
                    .first()
                )
                if row is None:
                    return None
                _ensure_related(related)
                if changes.ticket_type_id is not None:
                    row.ticket_type_id = changes.ticket_type_id.value
                if changes.venue_id is not None:
                    row.venue_id = changes.venue_id.value
                if changes.bought_for_ids is not None:
                    row.bought_for_ids = [str(user_id) for user_id in changes.bought_for_ids]
                if changes.no_of_tickets is not None:
                    row.no_of_tickets = changes.no_of_tickets
                if changes.payment_status is not None:
                    row.payment_status = changes.payment_status.value
                row.save()
        except DatabaseError as exc:
            raise StoreFailureError("update_registration") from exc
        return to_registration(row)

    def list_registrations(self, event_id: EventId | None = None) -> list[Registration]:
        try:
            rows = models.Registration.objects.all()
            if event_id is not None:
                rows = rows.filter(event_id=event_id.value)
            return [to_registration(row) for row in rows]
        except DatabaseError as exc:
            raise StoreFailureError("list_registrations") from exc

    def delete_registration(self, registration_id: RegistrationId) -> bool:
        try:
            deleted, _ = models.Registration.objects.filter(pk=registration_id.value).delete()
        except DatabaseError as exc:
            raise StoreFailureError("delete_registration") from exc
        return deleted > 0

    def get_credential(self, token: str) -> Credential | None:
        try:
            row = (
                models.RegistrationCredential.objects.select_related("superseded_by")
                .filter(token=token)
                .first()
            )
        except DatabaseError as exc:
            raise StoreFailureError("get_credential") from exc
        return to_credential(row) if row is not None else None

    def current_credential(self, registration_id: RegistrationId) -> Credential | None:
        try:
            row = (
                models.RegistrationCredential.objects.filter(
                    registration_id=registration_id.value, revoked_at__isnull=True
                )
                .order_by("-issued_at")
                .first()
            )
        except DatabaseError as exc:
            raise StoreFailureError("current_credential") from exc
        return to_credential(row) if row is not None else None

    def rotate_credential(
        self, registration_id: RegistrationId, credential: Credential
    ) -> tuple[Registration, str] | None:
        try:
            with transaction.atomic():
                row = (
                    models.Registration.objects.select_for_update()
                    .filter(pk=registration_id.value)
                    .first()
                )
                if row is None:
                    return None
                previous_artifact = row.qr_code
                replacement = models.RegistrationCredential.objects.create(
                    token=credential.token,
                    registration=row,
                    artifact_name=credential.artifact_name,
                    issued_at=credential.issued_at,
                )
                models.RegistrationCredential.objects.filter(
                    registration=row, revoked_at__isnull=True
                ).exclude(pk=replacement.pk).update(
                    revoked_at=credential.issued_at, superseded_by=replacement
                )
                row.qr_code = credential.artifact_name
                row.save(update_fields=["qr_code"])
        except DatabaseError as exc:
            raise StoreFailureError("rotate_credential") from exc
        return to_registration(row), previous_artifact

    def mark_attended(
        self, registration_id: RegistrationId, check_date: datetime
    ) -> Registration | None:
        try:
            updated = models.Registration.objects.filter(
                pk=registration_id.value, attended=False
            ).update(attended=True, check_date=check_date)
        except DatabaseError as exc:
            raise StoreFailureError("mark_attended") from exc
        if not updated:
            return None
        return self.get_registration(registration_id)
