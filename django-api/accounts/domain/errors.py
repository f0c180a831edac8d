"""Domain errors for organizations and users."""

from common.errors import DomainError, ErrorCode


class OrganizationNotFoundError(DomainError):
    """Raised when an organization is not found."""

    def __init__(self, organization_id: str) -> None:
        super().__init__(
            code=ErrorCode.ORGANIZATION_NOT_FOUND,
            message="Organization not found",
        )
        self.organization_id = organization_id


class UserNotFoundError(DomainError):
    """Raised when the user in the identity does not exist."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.USER_NOT_FOUND,
            message="User in token does not exist",
        )
        self.user_id = user_id
