"""Domain representations of organizations and their members."""

from dataclasses import dataclass

from accounts.domain.value_objects import OrganizationId, UserId


@dataclass(frozen=True)
class Organization:
    """Domain representation of an Organization."""

    id: OrganizationId
    name: str
    contact_email: str


@dataclass(frozen=True)
class Member:
    """A user together with the organizations they belong to."""

    id: UserId
    username: str
    email: str
    organization_ids: frozenset[OrganizationId] = frozenset()

    def belongs_to(self, organization_id: OrganizationId) -> bool:
        return organization_id in self.organization_ids
