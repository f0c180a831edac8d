"""HTTP handlers (views) for registrations and QR credentials.

Handlers parse the request, call RegistrationLifecycle and serialize the
result. Domain errors are mapped to responses by common.http.exception_handler.
"""

from django.http import FileResponse
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.identity import identity_from_request
from common.http import success_response
from registrations.handlers.serializers import CredentialLocatorSerializer, RegistrationSerializer
from registrations.services import CredentialIssuer, RegistrationLifecycle
from registrations.stores import DjangoRegistrationStore


def get_registration_lifecycle() -> RegistrationLifecycle:
    return RegistrationLifecycle(DjangoRegistrationStore(), CredentialIssuer())


class RegistrationListView(APIView):
    """Handler for GET/POST /api/registrations"""

    def get(self, request: Request) -> Response:
        registrations = get_registration_lifecycle().list_registrations()
        return success_response(
            "Registrations retrieved successfully",
            RegistrationSerializer(registrations, many=True).data,
        )

    def post(self, request: Request) -> Response:
        lifecycle = get_registration_lifecycle()
        registration = lifecycle.register(request.data, identity_from_request(request))
        locator = lifecycle.credential_locator(str(registration.id))
        return success_response(
            "Registration created successfully",
            {
                **RegistrationSerializer(registration).data,
                "credential": CredentialLocatorSerializer(locator).data,
            },
            status.HTTP_201_CREATED,
        )


class RegistrationDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/registrations/{registration_id}"""

    def get(self, request: Request, registration_id: str) -> Response:
        registration = get_registration_lifecycle().get(registration_id)
        return success_response(
            "Registration retrieved successfully", RegistrationSerializer(registration).data
        )

    def put(self, request: Request, registration_id: str) -> Response:
        registration = get_registration_lifecycle().update(registration_id, request.data)
        return success_response(
            "Registration updated successfully", RegistrationSerializer(registration).data
        )

    def delete(self, request: Request, registration_id: str) -> Response:
        get_registration_lifecycle().delete(registration_id)
        return success_response("Registration deleted successfully")


class CredentialLocatorView(APIView):
    """Handler for GET /api/registrations/{registration_id}/qrcode"""

    def get(self, request: Request, registration_id: str) -> Response:
        locator = get_registration_lifecycle().credential_locator(registration_id)
        return success_response(
            "QR code retrieved successfully", CredentialLocatorSerializer(locator).data
        )


class CredentialImageView(APIView):
    """Handler for GET /api/registrations/{registration_id}/qrcode/image"""

    def get(self, request: Request, registration_id: str) -> FileResponse:
        image = get_registration_lifecycle().open_credential_image(registration_id)
        return FileResponse(image, content_type="image/png")


class RegenerateCredentialView(APIView):
    """Handler for POST /api/registrations/{registration_id}/qrcode/regenerate"""

    def post(self, request: Request, registration_id: str) -> Response:
        lifecycle = get_registration_lifecycle()
        registration = lifecycle.regenerate_credential(registration_id)
        locator = lifecycle.credential_locator(registration_id)
        return success_response(
            "QR code regenerated successfully",
            {
                **RegistrationSerializer(registration).data,
                "credential": CredentialLocatorSerializer(locator).data,
            },
        )


class CheckInView(APIView):
    """Handler for POST /api/registrations/{registration_id}/check-in"""

    def post(self, request: Request, registration_id: str) -> Response:
        registration = get_registration_lifecycle().check_in(registration_id)
        return success_response("Attendance recorded", RegistrationSerializer(registration).data)


class ResolveCredentialView(APIView):
    """Handler for GET /api/registrations/credentials/{credential}"""

    def get(self, request: Request, credential: str) -> Response:
        registration = get_registration_lifecycle().resolve_credential(credential)
        return success_response(
            "Registration retrieved successfully", RegistrationSerializer(registration).data
        )


class EventRegistrationsView(APIView):
    """Handler for GET /api/events/{event_id}/registrations"""

    def get(self, request: Request, event_id: str) -> Response:
        registrations = get_registration_lifecycle().list_for_event(event_id)
        return success_response(
            "Registrations retrieved successfully",
            RegistrationSerializer(registrations, many=True).data,
        )
