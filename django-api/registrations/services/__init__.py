from registrations.services.credentials import CredentialIssuer
from registrations.services.lifecycle import RegistrationLifecycle

__all__ = ["CredentialIssuer", "RegistrationLifecycle"]
