from registrations.domain.models import (
    Credential,
    CredentialLocator,
    NewRegistration,
    Registration,
)
from registrations.domain.value_objects import PaymentStatus, RegistrationId, RegistrationState

__all__ = [
    "Credential",
    "CredentialLocator",
    "NewRegistration",
    "Registration",
    "PaymentStatus",
    "RegistrationId",
    "RegistrationState",
]
