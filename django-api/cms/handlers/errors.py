"""Domain error to HTTP response mapping.

Installed as the REST framework ``EXCEPTION_HANDLER``. Errors that are not
domain errors fall through to the framework's default handling; anything it
does not recognise (database failures included) becomes a plain 500.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as default_exception_handler

from cms.domain.errors import DomainError, ErrorCode

logger = logging.getLogger("cms.handlers")

STATUS_BY_CODE = {
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RESOURCE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_OPERATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.OPERATION_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_DATA: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FILTER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PROGRAMME_HAS_NO_PIECES: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_BIOGRAPHY_VARIANT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.COMPOSER_PROTECTED: status.HTTP_403_FORBIDDEN,
    ErrorCode.PIECE_PROTECTED: status.HTTP_403_FORBIDDEN,
    ErrorCode.VENUE_PROTECTED: status.HTTP_403_FORBIDDEN,
    ErrorCode.PROGRAMME_PROTECTED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_PROTECTED: status.HTTP_403_FORBIDDEN,
    ErrorCode.PROGRAMME_IMMUTABLE: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_IMMUTABLE: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_NOT_PUBLISHABLE: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVARIANT_VIOLATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(error: DomainError, status_code: int) -> dict:
    if status_code >= 500:
        return {"code": error.code.value, "error": "internal server error"}
    body = {"code": error.code.value, "error": error.message}
    if error.detail:
        body["detail"] = error.detail
    return body


def exception_handler(exc, context):
    if not isinstance(exc, DomainError):
        return default_exception_handler(exc, context)

    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    view = context.get("view")
    extra = {"code": exc.code.value, "view": type(view).__name__ if view else None}
    if status_code >= 500:
        logger.error("request failed: %s", exc, extra=extra)
    else:
        logger.info("request rejected: %s", exc, extra=extra)
    return Response(error_body(exc, status_code), status=status_code)
