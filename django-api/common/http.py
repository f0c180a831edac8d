"""Response envelopes and domain error mapping for DRF handlers.

Every response carries a success flag and a human-readable message. Domain
errors never leak internal details; unexpected exceptions are logged and
reported as a generic 500.
"""

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from common.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.ORGANIZATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.MISSING_FIELDS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_VALUE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SCHEDULING_CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STATUS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VENUES_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_REGISTRATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_RELATED_ENTITY: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_CREDENTIAL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_CHECKED_IN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def success_response(message: str, data: Any = None, status_code: int = status.HTTP_200_OK) -> Response:
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code)


def error_response(error: DomainError) -> Response:
    body: dict[str, Any] = {
        "success": False,
        "code": error.code.value,
        "message": error.message,
    }
    if error.details:
        body["details"] = error.details
    return Response(body, status=STATUS_BY_CODE[error.code])


def exception_handler(exc: Exception, context: dict) -> Response:
    """DRF exception handler rendering every failure as an envelope."""
    if isinstance(exc, DomainError):
        return error_response(exc)

    response = drf_exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = {
            "success": False,
            "message": str(detail) if detail else "Request could not be processed",
            "errors": response.data,
        }
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", type(view).__name__ if view else "handler")
    return Response(
        {"success": False, "message": "Internal Server Error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
