from django.urls import path

from registrations.handlers import (
    CheckInView,
    CredentialImageView,
    CredentialLocatorView,
    EventRegistrationsView,
    RegenerateCredentialView,
    RegistrationDetailView,
    RegistrationListView,
    ResolveCredentialView,
)

urlpatterns = [
    path("registrations", RegistrationListView.as_view(), name="registration-list"),
    path(
        "registrations/credentials/<str:credential>",
        ResolveCredentialView.as_view(),
        name="registration-resolve-credential",
    ),
    path(
        "registrations/<str:registration_id>",
        RegistrationDetailView.as_view(),
        name="registration-detail",
    ),
    path(
        "registrations/<str:registration_id>/qrcode",
        CredentialLocatorView.as_view(),
        name="registration-qrcode",
    ),
    path(
        "registrations/<str:registration_id>/qrcode/image",
        CredentialImageView.as_view(),
        name="registration-qrcode-image",
    ),
    path(
        "registrations/<str:registration_id>/qrcode/regenerate",
        RegenerateCredentialView.as_view(),
        name="registration-qrcode-regenerate",
    ),
    path(
        "registrations/<str:registration_id>/check-in",
        CheckInView.as_view(),
        name="registration-check-in",
    ),
    path(
        "events/<str:event_id>/registrations",
        EventRegistrationsView.as_view(),
        name="event-registrations",
    ),
]
