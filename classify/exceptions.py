"""
Classify Exceptions

Error taxonomy for the Classify backend. Every error the core raises derives
from ClassifyException and carries the HTTP status it maps to, so the DRF
exception handler in exception_handlers.py can render all of them the same
way.

Hierarchy:
- ClassifyException
    - Unauthorized (401): missing, malformed, expired or forged credentials
    - NotFound (404): quiz, lesson or course absent
    - ValidationFailed (400): invalid request data
        - AnswerCountMismatch: answer count differs from question count
    - Conflict (409): duplicate registration email
    - InternalError (500): storage or transaction failure
        - GradingFailed: the grading write was rolled back

Author: Classify Development Team
Version: 1.0.0
"""

import enum
from typing import Any, Dict, Optional

from rest_framework import status


class ClassifyException(Exception):
    """
    Base exception class for all Classify errors.

    Attributes:
        message (str): Human-readable error message, safe to show to clients
        status_code (int): HTTP status code the error maps to
        error_code (str): Stable machine-readable identifier
        details (Dict[str, Any]): Additional error details
    """

    default_message = "An internal server error occurred."
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "Internal"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to the response body sent to clients.

        Returns:
            Dictionary with the error message and, if present, the details
        """
        data: Dict[str, Any] = {"error": self.message}
        if self.details:
            data["details"] = self.details
        return data


class UnauthorizedReason(str, enum.Enum):
    """Why a credential was rejected. Logged only, never sent to the client."""

    MISSING = "missing"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    UNKNOWN_USER = "unknown_user"


class Unauthorized(ClassifyException):
    """
    Raised when a request cannot be tied to an authenticated user.

    The reason is kept on the exception for logging. The client always sees
    the same generic message, whatever the reason.
    """

    default_message = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "Unauthorized"

    def __init__(self, reason: UnauthorizedReason) -> None:
        self.reason = reason
        super().__init__()

    def __str__(self) -> str:
        return f"{self.message} ({self.reason.value})"


class NotFound(ClassifyException):
    default_message = "Resource not found."
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NotFound"


class ValidationFailed(ClassifyException):
    default_message = "Invalid request data."
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "Validation"


class AnswerCountMismatch(ValidationFailed):
    """Raised when a submission does not answer every question exactly once."""

    error_code = "AnswerCountMismatch"

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            "Answer count mismatch with question count.",
            details={"expected": expected, "received": received},
        )


class Conflict(ClassifyException):
    default_message = "Resource already exists."
    status_code = status.HTTP_409_CONFLICT
    error_code = "Conflict"


class InternalError(ClassifyException):
    pass


class GradingFailed(InternalError):
    """Raised when the submission write failed and was rolled back."""

    default_message = "Failed to submit quiz."
    error_code = "GradingFailed"
