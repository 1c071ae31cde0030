"""
Bearer Token Codec

Issues and verifies the compact, self-contained credentials used by the
Classify API. A credential is three dot-separated, unpadded URL-safe base64
segments:

    header.payload.signature

The header is {"alg": "HS256", "typ": "JWT"}, the payload carries the subject
id and the issue/expiry timestamps, and the signature is HMAC-SHA256 over the
exact ASCII bytes of "header.payload". There is no server-side session or
revocation store: rotating the secret is the only way to invalidate tokens
before they expire.

Author: Classify Development Team
Version: 1.0.0
"""

import json
import time
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Union

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.crypto import constant_time_compare
from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_decode, base64url_encode

from ..exceptions import Unauthorized, UnauthorizedReason

Clock = Callable[[], float]

HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class Credential:
    """Decoded token payload."""

    subject_id: int
    issued_at: int
    expires_at: int


class TokenCodec:
    """
    Encode, sign, decode and verify bearer credentials.

    The codec holds no state besides its configuration: verification is a
    pure function of (secret, clock, token string).

    Attributes:
        secret: HMAC signing key
        lifetime: Default validity window for issued tokens
        clock: Callable returning the current epoch time in seconds

    Example:
        >>> codec = TokenCodec("s3cret", lifetime=timedelta(hours=1))
        >>> token = codec.issue(42)
        >>> codec.verify(token)
        42
    """

    def __init__(
        self,
        secret: Union[str, bytes],
        lifetime: timedelta = timedelta(days=1),
        clock: Clock = time.time,
    ) -> None:
        if not secret:
            raise ValueError("A non-empty signing secret is required.")
        self.secret = secret.encode("utf-8") if isinstance(secret, str) else secret
        self.lifetime = lifetime
        self.clock = clock
        self._algorithm = HMACAlgorithm(HMACAlgorithm.SHA256)

    def issue(self, subject_id: int, ttl: Optional[timedelta] = None) -> str:
        """
        Create a signed credential for a subject.

        Args:
            subject_id: Id of the authenticated user
            ttl: Validity window, defaults to the codec lifetime

        Returns:
            The credential string "header.payload.signature"
        """
        issued_at = int(self.clock())
        if ttl is None:
            ttl = self.lifetime
        expires_at = issued_at + int(ttl.total_seconds())
        payload = {"user_id": subject_id, "iat": issued_at, "exp": expires_at}

        signing_input = f"{_encode_segment(HEADER)}.{_encode_segment(payload)}"
        return f"{signing_input}.{self._sign(signing_input)}"

    def decode(self, token: Optional[str]) -> Credential:
        """
        Verify a credential and return its decoded payload.

        The signature is checked before the payload is parsed, so a tampered
        payload fails with BAD_SIGNATURE and is never interpreted.

        Raises:
            Unauthorized: MISSING, MALFORMED, BAD_SIGNATURE or EXPIRED
        """
        if not token:
            raise Unauthorized(UnauthorizedReason.MISSING)

        segments = token.split(".")
        if len(segments) != 3:
            raise Unauthorized(UnauthorizedReason.MALFORMED)

        header_segment, payload_segment, signature_segment = segments
        expected = self._sign(f"{header_segment}.{payload_segment}")
        if not constant_time_compare(expected, signature_segment):
            raise Unauthorized(UnauthorizedReason.BAD_SIGNATURE)

        credential = _parse_payload(payload_segment)
        if credential.expires_at < self.clock():
            raise Unauthorized(UnauthorizedReason.EXPIRED)
        return credential

    def verify(self, token: Optional[str]) -> int:
        """
        Verify a credential and return its subject id.

        Raises:
            Unauthorized: see decode()
        """
        return self.decode(token).subject_id

    def _sign(self, signing_input: str) -> str:
        signature = self._algorithm.sign(signing_input.encode("ascii"), self.secret)
        return base64url_encode(signature).decode("ascii")


def _encode_segment(data: Dict[str, Any]) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode("utf-8")
    return base64url_encode(raw).decode("ascii")


def _parse_payload(segment: str) -> Credential:
    try:
        payload = json.loads(base64url_decode(segment))
        subject_id = payload["user_id"]
        expires_at = payload["exp"]
        issued_at = payload.get("iat", 0)
    except (ValueError, TypeError, KeyError, AttributeError):
        raise Unauthorized(UnauthorizedReason.MALFORMED)

    # bool is an int subclass, reject it explicitly
    if not isinstance(subject_id, int) or isinstance(subject_id, bool):
        raise Unauthorized(UnauthorizedReason.MALFORMED)
    if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
        raise Unauthorized(UnauthorizedReason.MALFORMED)

    return Credential(subject_id=subject_id, issued_at=int(issued_at), expires_at=int(expires_at))


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    """
    Return the process-wide codec built from settings.CLASSIFY_TOKEN.

    Built once on first use; rebuilt only when the setting changes.
    """
    config = getattr(settings, "CLASSIFY_TOKEN", {})
    return TokenCodec(
        secret=config.get("SECRET") or settings.SECRET_KEY,
        lifetime=config.get("LIFETIME", timedelta(days=1)),
    )


@receiver(setting_changed)
def reload_token_codec(*, setting: str, **kwargs) -> None:
    if setting in ("CLASSIFY_TOKEN", "SECRET_KEY"):
        get_token_codec.cache_clear()
