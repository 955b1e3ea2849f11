"""Maps exceptions raised by services to HTTP responses."""

import typing as t

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.errors import DomainError, ErrorCode, ErrorKind

logger = structlog.get_logger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

KIND_BY_STATUS = {
    status.HTTP_401_UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorKind.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
}


def error_body(kind: ErrorKind, code: str, detail: t.Any) -> dict[str, t.Any]:
    return {"kind": kind.value, "code": code, "detail": detail}


def handle_exception(exc: Exception, context: dict[str, t.Any]) -> Response:
    """DRF exception handler.

    Domain errors map by kind; DRF's own exceptions keep their status; anything
    else is logged and reported as a generic 500 without internals.
    """
    if isinstance(exc, DomainError):
        response = Response(error_body(exc.kind, exc.code.value, exc.message), status=STATUS_BY_KIND[exc.kind])
        if exc.kind is ErrorKind.UNAUTHORIZED:
            response["WWW-Authenticate"] = "Bearer"
        return response

    response = exception_handler(exc, context)
    if response is not None:
        kind = KIND_BY_STATUS.get(response.status_code, ErrorKind.INVALID_REQUEST)
        code = str(getattr(exc, "default_code", "error")).upper()
        response.data = error_body(kind, code, response.data)
        return response

    view = context.get("view")
    logger.exception("unhandled_exception", view=type(view).__name__ if view else None)
    return Response(
        error_body(ErrorKind.UNEXPECTED, ErrorCode.UNEXPECTED.value, "An unexpected error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
