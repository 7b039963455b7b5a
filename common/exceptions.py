"""Project-wide DRF exception handler.

Every error leaves the API as ``{"error": "<message>"}``. Field level
validation messages are kept under ``details``.
"""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("common")

DEFAULT_FAILURE_MESSAGE = "Internal server error"


def _first_message(detail):
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ""
    if isinstance(detail, dict):
        if "error" in detail:
            return _first_message(detail["error"])
        if "detail" in detail:
            return _first_message(detail["detail"])
        for key, value in detail.items():
            message = _first_message(value)
            if key == "non_field_errors":
                return message
            return f"{key}: {message}"
        return ""
    return str(detail)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is not None:
        detail = exc.detail if isinstance(exc, exceptions.APIException) else response.data
        payload = {"error": _first_message(detail)}
        if isinstance(exc, exceptions.ValidationError) and isinstance(detail, dict):
            details = {k: v for k, v in detail.items() if k != "error"}
            if details:
                payload["details"] = details
        response.data = payload
        return response

    view = context.get("view")
    request = context.get("request")
    logger.exception(
        "Unhandled error in %s %s",
        getattr(request, "method", "-"),
        getattr(request, "path", "-"),
    )
    message = getattr(view, "failure_message", None) or DEFAULT_FAILURE_MESSAGE
    return Response({"error": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
