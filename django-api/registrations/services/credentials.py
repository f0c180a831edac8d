"""Registration credentials: signed tokens rendered as QR code PNGs.

The token is produced with django.core.signing, so it is URL-safe and
tamper-evident; the QR image only carries the token. Images live in Django
file storage under REGISTRATION_CREDENTIALS["STORAGE_DIR"].
"""

import logging
import secrets
from io import BytesIO

import qrcode
from django.conf import settings
from django.core import signing
from django.core.files import File
from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage
from django.utils import timezone
from qrcode import constants
from qrcode.image.pil import PilImage

from accounts.domain import UserId
from events.domain import EventId
from registrations.domain import Credential, RegistrationId
from registrations.domain.errors import InvalidCredentialError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = "qrcodes"
DEFAULT_SALT = "registrations.credential"


def render_qr_png(data: str) -> bytes:
    """Render data as a black-on-white QR code PNG."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
        image_factory=PilImage,
    )
    qr.add_data(data)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class CredentialIssuer:
    """Issues, decodes and disposes of registration credentials."""

    def __init__(
        self,
        storage: Storage | None = None,
        directory: str | None = None,
        salt: str | None = None,
    ) -> None:
        config = getattr(settings, "REGISTRATION_CREDENTIALS", {})
        self._storage = storage or default_storage
        self._directory = directory or config.get("STORAGE_DIR", DEFAULT_STORAGE_DIR)
        self._salt = salt or config.get("SIGNING_SALT", DEFAULT_SALT)

    def issue(
        self, registration_id: RegistrationId, user_id: UserId, event_id: EventId
    ) -> Credential:
        """Sign a fresh token for a registration and store its QR image."""
        issued_at = timezone.now()
        nonce = secrets.token_hex(8)
        token = signing.dumps(
            {
                "registrationId": str(registration_id),
                "userId": str(user_id),
                "eventId": str(event_id),
                "issuedAt": issued_at.isoformat(),
                "nonce": nonce,
            },
            salt=self._salt,
            compress=True,
        )
        artifact_name = self._storage.save(
            f"{self._directory}/{registration_id}-{nonce}.png",
            ContentFile(render_qr_png(token)),
        )
        logger.debug("Stored credential image %s for registration %s", artifact_name, registration_id)
        return Credential(
            token=token,
            registration_id=registration_id,
            artifact_name=artifact_name,
            issued_at=issued_at,
        )

    def decode(self, raw: str) -> RegistrationId:
        """Verify a token and return the registration it is bound to.

        Raises:
            InvalidCredentialError: If the token is forged, malformed or
                carries no usable registration id.
        """
        try:
            payload = signing.loads(raw, salt=self._salt)
        except signing.BadSignature:
            raise InvalidCredentialError() from None
        if not isinstance(payload, dict):
            raise InvalidCredentialError()
        try:
            return RegistrationId.from_string(payload["registrationId"])
        except (KeyError, ValueError):
            raise InvalidCredentialError() from None

    def discard(self, artifact_name: str) -> None:
        """Delete a stored image; a missing or undeletable file is not an error."""
        if not artifact_name:
            return
        try:
            self._storage.delete(artifact_name)
        except OSError:
            logger.warning("Could not delete credential image %s", artifact_name, exc_info=True)

    def exists(self, artifact_name: str) -> bool:
        return bool(artifact_name) and self._storage.exists(artifact_name)

    def url(self, artifact_name: str) -> str:
        return self._storage.url(artifact_name)

    def open(self, artifact_name: str) -> File:
        return self._storage.open(artifact_name, "rb")
