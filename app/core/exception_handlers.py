"""
DRF exception handler producing the API's uniform error body.

Every error response has the same shape:

    {"message": "<summary>", "errors": ["<reason>", ...]}

Mapping:
    - core.exceptions.BaseApplicationError → exc.status_code, exc.to_dict()
    - DRF APIException (validation, 401, 404, 405, parse errors) → DRF's status,
      detail flattened into `errors`
    - Anything else → logged with traceback, 500 with a generic message.
      The exception text is only added to `errors` when DEBUG is on.

Configure in settings:
    REST_FRAMEWORK = {"EXCEPTION_HANDLER": "core.exception_handlers.api_exception_handler"}

Views can set `validation_error_message` to replace the default
"Validation failed" summary for serializer errors (e.g. "Registration failed").
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.exceptions import BaseApplicationError, InvalidTokenError

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_VALIDATION_MESSAGE = "Validation failed"
INTERNAL_ERROR_MESSAGE = "An internal server error occurred"


def flatten_errors(detail: Any, field: str | None = None) -> list[str]:
    """
    Flatten a DRF error detail structure into a list of strings.

    Field errors are prefixed with the field name; non-field errors are not.

    Example:
        >>> flatten_errors({"email": ["Enter a valid email address."]})
        ['email: Enter a valid email address.']
    """
    if isinstance(detail, dict):
        flattened: list[str] = []
        for key, value in detail.items():
            if key in ("non_field_errors", "detail"):
                flattened.extend(flatten_errors(value, field))
            else:
                flattened.extend(flatten_errors(value, key))
        return flattened
    if isinstance(detail, (list, tuple)):
        flattened = []
        for item in detail:
            flattened.extend(flatten_errors(item, field))
        return flattened
    text = str(detail)
    return [f"{field}: {text}" if field else text]


def _summary_for(exc: exceptions.APIException, context: dict) -> str:
    if isinstance(exc, exceptions.ValidationError):
        view = context.get("view")
        return getattr(view, "validation_error_message", DEFAULT_VALIDATION_MESSAGE)
    detail = exc.detail
    if isinstance(detail, dict) and "detail" in detail:
        return str(detail["detail"])
    if isinstance(detail, str):
        return str(detail)
    return str(exc.default_detail)


def api_exception_handler(exc: Exception, context: dict) -> Response:
    """
    Convert any exception raised in a DRF view into an error response.

    Args:
        exc: The exception raised by the view
        context: DRF handler context (view, args, kwargs, request)

    Returns:
        Response with {message, errors} body. Never returns None, so DRF
        does not re-raise unexpected exceptions.
    """
    if isinstance(exc, BaseApplicationError):
        log = logger.warning if exc.status_code >= 500 else logger.info
        log(
            "Request failed: %s",
            exc.error_code,
            extra={"error_code": exc.error_code, "details": exc.details},
        )
        response = Response(exc.to_dict(), status=exc.status_code)
        if isinstance(exc, InvalidTokenError):
            response["WWW-Authenticate"] = 'Bearer realm="api"'
        return response

    response = drf_exception_handler(exc, context)
    if response is not None:
        # DRF already converted Http404 / PermissionDenied into APIExceptions
        api_exc = exc if isinstance(exc, exceptions.APIException) else None
        if api_exc is None:
            message = str(response.data.get("detail", "")) if isinstance(response.data, dict) else ""
            response.data = {"message": message, "errors": []}
            return response

        if isinstance(api_exc, exceptions.ValidationError):
            errors = flatten_errors(api_exc.detail)
        else:
            errors = []
        response.data = {"message": _summary_for(api_exc, context), "errors": errors}
        return response

    view = context.get("view")
    logger.error(
        "Unhandled exception in %s",
        view.__class__.__name__ if view is not None else "view",
        exc_info=exc,
    )
    errors = [str(exc)] if settings.DEBUG else []
    return Response(
        {"message": INTERNAL_ERROR_MESSAGE, "errors": errors},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
