"""Identity checks shared by every write that acts for an organization.

The identity is trusted as issued; these checks only establish that it is
well-formed, that what it names still exists, and that the user is a member
of the organization it acts for.
"""

import logging

from accounts.domain import Member, OrganizationId, UserId
from accounts.domain.errors import OrganizationNotFoundError, UserNotFoundError
from accounts.identity import Identity
from accounts.stores.interfaces import DirectoryStore
from common.errors import ForbiddenError, UnauthenticatedError
from common.value_objects import parse_identifier

logger = logging.getLogger(__name__)


def authorize_member(
    identity: Identity, directory: DirectoryStore
) -> tuple[OrganizationId, Member]:
    """Resolve the acting organization and member for an identity.

    Raises:
        UnauthenticatedError: If the identity lacks a user or any membership.
        InvalidIdentifierError: If the organization or user id is malformed.
        OrganizationNotFoundError: If the organization does not exist.
        UserNotFoundError: If the user does not exist.
        ForbiddenError: If the user is not a member of the organization.
    """
    organization_value = identity.acting_organization_id
    if not identity.user_id or not organization_value:
        raise UnauthenticatedError()

    organization_id = parse_identifier(OrganizationId, organization_value, "organizationId")
    user_id = parse_identifier(UserId, identity.user_id, "userId")

    if directory.get_organization(organization_id) is None:
        logger.info("Organization %s not found for user %s", organization_id, user_id)
        raise OrganizationNotFoundError(str(organization_id))

    member = directory.get_member(user_id)
    if member is None:
        raise UserNotFoundError(str(user_id))
    if not member.belongs_to(organization_id):
        logger.warning("User %s is not a member of organization %s", user_id, organization_id)
        raise ForbiddenError()

    return organization_id, member
