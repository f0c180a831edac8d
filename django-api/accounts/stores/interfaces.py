"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from accounts.domain import Member, Organization, OrganizationId, UserId


class DirectoryStore(ABC):
    """Interface for organization and membership lookups."""

    @abstractmethod
    def get_organization(self, organization_id: OrganizationId) -> Organization | None:
        """Return an organization by ID, or None if not found."""
        ...

    @abstractmethod
    def get_member(self, user_id: UserId) -> Member | None:
        """Return a user with their organization memberships, or None."""
        ...
