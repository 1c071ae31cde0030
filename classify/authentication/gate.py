"""
Auth Gate

Bridges an inbound request to an authenticated subject id. This is the single
authorization checkpoint: every component behind it trusts the id it returns.
"""

import logging
import re
from typing import Mapping, Optional

from ..exceptions import Unauthorized, UnauthorizedReason
from .token_codec import TokenCodec, get_token_codec

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"

# Case-sensitive scheme, exactly one space, token without whitespace
BEARER_PATTERN = re.compile(r"^Bearer (\S+)$")


def extract_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """Return the raw token of a "Bearer <token>" header, or None."""
    value = headers.get(AUTHORIZATION_HEADER)
    if not value:
        return None
    match = BEARER_PATTERN.match(value)
    return match.group(1) if match else None


class AuthGate:
    """
    Authenticate header maps against a TokenCodec.

    Example:
        >>> gate = AuthGate(TokenCodec("s3cret"))
        >>> gate.authenticate({"Authorization": f"Bearer {token}"})
        42
    """

    def __init__(self, codec: Optional[TokenCodec] = None) -> None:
        self._codec = codec

    @property
    def codec(self) -> TokenCodec:
        return self._codec or get_token_codec()

    def authenticate(self, headers: Mapping[str, str]) -> int:
        """
        Return the subject id of the request's bearer credential.

        Args:
            headers: Request header map (Django's request.headers or a dict)

        Raises:
            Unauthorized: with the underlying reason; callers must only expose
                the generic message
        """
        token = extract_bearer_token(headers)
        if token is None:
            if headers.get(AUTHORIZATION_HEADER):
                logger.warning(
                    f"Bearer credential rejected: {UnauthorizedReason.MISSING.value} "
                    "(Authorization header does not match 'Bearer <token>')"
                )
            raise Unauthorized(UnauthorizedReason.MISSING)

        try:
            return self.codec.verify(token)
        except Unauthorized as e:
            logger.warning(f"Bearer credential rejected: {e.reason.value}")
            raise
