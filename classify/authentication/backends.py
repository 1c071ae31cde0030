"""
DRF Bearer Token Authentication

Plugs the AuthGate into Django REST Framework. Configured as the only
DEFAULT_AUTHENTICATION_CLASSES entry, so every API view authenticates
through it.
"""

import logging
from typing import Optional, Tuple

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AbstractBaseUser
from rest_framework import authentication, exceptions
from rest_framework.request import Request

from ..exceptions import Unauthorized, UnauthorizedReason
from .gate import AuthGate

logger = logging.getLogger(__name__)


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """
    Authenticate requests carrying "Authorization: Bearer <token>".

    - No Authorization header: returns None, so AllowAny views stay reachable
      and protected views answer 401 through NotAuthenticated.
    - Any other rejection raises AuthenticationFailed with a generic message;
      the actual reason is only logged.
    """

    www_authenticate_realm = "api"

    def __init__(self, gate: Optional[AuthGate] = None) -> None:
        self.gate = gate or AuthGate()

    def authenticate(self, request: Request) -> Optional[Tuple[AbstractBaseUser, int]]:
        if not request.headers.get("Authorization"):
            return None

        try:
            user_id = self.gate.authenticate(request.headers)
        except Unauthorized:
            raise exceptions.AuthenticationFailed(Unauthorized.default_message)

        return self.get_user(user_id), user_id

    def get_user(self, user_id: int) -> AbstractBaseUser:
        User = get_user_model()
        try:
            user = User.objects.get(pk=user_id)
        except User.DoesNotExist:
            logger.warning(
                f"Bearer credential rejected: {UnauthorizedReason.UNKNOWN_USER.value} (user {user_id})"
            )
            raise exceptions.AuthenticationFailed(Unauthorized.default_message)

        if not user.is_active:
            logger.warning(f"Bearer credential rejected: inactive user {user_id}")
            raise exceptions.AuthenticationFailed(Unauthorized.default_message)
        return user

    def authenticate_header(self, request: Request) -> str:
        return f'Bearer realm="{self.www_authenticate_realm}"'
