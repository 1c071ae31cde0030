"""
Classify DRF Exception Handler

Configured as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Renders ClassifyException
and DRF's own errors as {"error": <message>} bodies, plus "details" for
validation errors.

Kept apart from classify.exceptions: rest_framework.views reads the
authentication classes on import, and those import classify.exceptions.

Author: Classify Development Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, Optional

from rest_framework import exceptions as drf_exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import (
    ClassifyException,
    InternalError,
    Unauthorized,
    UnauthorizedReason,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """
    Render ClassifyException and DRF errors as {"error": ...} responses.

    Authentication failures never leak their cause; InternalError is logged
    with its cause and answered with the generic message.
    """
    if isinstance(exc, ClassifyException):
        if isinstance(exc, InternalError):
            logger.error(f"{exc.error_code}: {exc.__cause__ or exc}")
        elif isinstance(exc, Unauthorized):
            logger.warning(f"Rejected credential: {exc.reason.value}")
        return Response(exc.to_dict(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        response.data = Unauthorized(UnauthorizedReason.MISSING).to_dict()
    elif isinstance(exc, drf_exceptions.ValidationError):
        response.data = {"error": ValidationFailed.default_message, "details": response.data}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": str(response.data["detail"])}
    return response
