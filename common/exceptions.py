"""Shared API error handling.

All endpoints report failures as JSON with at least an `error` string:

- 400 validation errors carry the field-level messages under `details`,
- 401/403/404/405/429 carry the DRF message as `error`,
- external service failures and unhandled errors return 500 with a generic
  message; the underlying message is added only when DEBUG is on.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


class ExternalServiceFailure(APIException):
    """A collaborator (Stripe, email, disk) failed while serving the request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "External service error."
    default_code = "external_service_failure"

    def __init__(self, service: str, detail=None, public_message=None):
        super().__init__(detail)
        self.service = service
        self.public_message = public_message or "External service error."


def _flatten_detail(data) -> str:
    """Return a single human readable message from a DRF error payload."""
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        return "Invalid request data"
    if isinstance(data, (list, tuple)):
        return str(data[0]) if data else "Invalid request data"
    return str(data)


def _view_name(context) -> str:
    view = context.get("view")
    return view.__class__.__name__ if view is not None else "unknown view"


def api_exception_handler(exc, context):
    """DRF exception handler producing `{"error": ..., "details"?: ...}` bodies."""
    if isinstance(exc, ExternalServiceFailure):
        logger.error(
            "%s failed in %s: %s", exc.service, _view_name(context), exc.detail
        )
        set_rollback()
        body = {"error": exc.public_message}
        if settings.DEBUG:
            body["message"] = str(exc.detail)
        return Response(body, status=exc.status_code)

    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error in %s", _view_name(context), exc_info=exc)
        set_rollback()
        body = {"error": "Internal server error"}
        if settings.DEBUG:
            body["message"] = str(exc)
        return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        response.data = {"error": "Invalid request data", "details": response.data}
    else:
        body = {"error": _flatten_detail(response.data)}
        body.update(getattr(exc, "extra", None) or {})
        response.data = body
    return response
