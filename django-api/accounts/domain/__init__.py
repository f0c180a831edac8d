from accounts.domain.models import Member, Organization
from accounts.domain.value_objects import OrganizationId, UserId

__all__ = [
    "Member",
    "Organization",
    "OrganizationId",
    "UserId",
]
