"""Django ORM implementation of the DirectoryStore."""

from django.db import DatabaseError

from accounts import models
from accounts.domain import Member, Organization, OrganizationId, UserId
from accounts.stores.interfaces import DirectoryStore
from common.errors import StoreFailureError


class DjangoDirectoryStore(DirectoryStore):
    """Database-backed directory using Django ORM."""

    def get_organization(self, organization_id: OrganizationId) -> Organization | None:
        try:
            row = models.Organization.objects.filter(pk=organization_id.value).first()
        except DatabaseError as exc:
            raise StoreFailureError("get_organization") from exc
        if row is None:
            return None
        return Organization(
            id=OrganizationId(row.id),
            name=row.name,
            contact_email=row.contact_email,
        )

    def get_member(self, user_id: UserId) -> Member | None:
        try:
            row = (
                models.User.objects.prefetch_related("organizations")
                .filter(pk=user_id.value)
                .first()
            )
        except DatabaseError as exc:
            raise StoreFailureError("get_member") from exc
        if row is None:
            return None
        return Member(
            id=UserId(row.id),
            username=row.username,
            email=row.email,
            organization_ids=frozenset(
                OrganizationId(org.id) for org in row.organizations.all()
            ),
        )
