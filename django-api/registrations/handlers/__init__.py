from registrations.handlers.views import (
    CheckInView,
    CredentialImageView,
    CredentialLocatorView,
    EventRegistrationsView,
    RegenerateCredentialView,
    RegistrationDetailView,
    RegistrationListView,
    ResolveCredentialView,
)

__all__ = [
    "CheckInView",
    "CredentialImageView",
    "CredentialLocatorView",
    "EventRegistrationsView",
    "RegenerateCredentialView",
    "RegistrationDetailView",
    "RegistrationListView",
    "ResolveCredentialView",
]
