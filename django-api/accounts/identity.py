"""Identity context at the trust boundary.

Tokens are issued and signed upstream. The authentication backend only turns
verified claims into an Identity; services never re-verify signatures, they
perform shape and existence checks on the identity they are handed.
"""

from dataclasses import dataclass
from typing import Any, Self

from rest_framework.request import Request
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication
from rest_framework_simplejwt.settings import api_settings

ORGANIZATION_ID_CLAIM = "organizationId"
ORGANIZATIONS_CLAIM = "organizations"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller: a user id and the organizations it acts for."""

    user_id: str | None = None
    organization_id: str | None = None
    organizations: tuple[str, ...] = ()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @property
    def is_anonymous(self) -> bool:
        return not self.is_authenticated

    @property
    def acting_organization_id(self) -> str | None:
        """Organization the caller acts for; the first membership if unset."""
        if self.organization_id:
            return self.organization_id
        return self.organizations[0] if self.organizations else None

    @classmethod
    def anonymous(cls) -> Self:
        return cls()

    @classmethod
    def from_claims(cls, claims: Any) -> Self:
        user_id = claims.get(api_settings.USER_ID_CLAIM)
        organizations = []
        for entry in claims.get(ORGANIZATIONS_CLAIM) or ():
            if isinstance(entry, dict):
                entry = entry.get(ORGANIZATION_ID_CLAIM)
            if entry:
                organizations.append(str(entry))
        organization_id = claims.get(ORGANIZATION_ID_CLAIM)
        return cls(
            user_id=str(user_id) if user_id else None,
            organization_id=str(organization_id) if organization_id else None,
            organizations=tuple(organizations),
        )


class IdentityAuthentication(JWTStatelessUserAuthentication):
    """Builds an Identity from the claims of a verified bearer token."""

    def get_user(self, validated_token) -> Identity:
        return Identity.from_claims(validated_token)


def identity_from_request(request: Request) -> Identity:
    user = request.user
    if isinstance(user, Identity):
        return user
    return Identity.anonymous()
