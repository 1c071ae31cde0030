"""
Classify User Authentication Views

Views:
- RegisterView: Create a student account and return a bearer token
- LoginView: Exchange email/password for a bearer token
- MeView: Current user with the per-course progress map

Tokens are returned in the response body; clients send them back in the
"Authorization: Bearer <token>" header.

Author: Classify Development Team
Version: 1.0.0
"""

import logging

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ...authentication import get_token_codec
from ...progress.services.progress_service import ProgressAggregator
from ..serializers import LoginSerializer, RegistrationSerializer, UserSerializer

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    API endpoint for self-service student registration.

    Request Body Example (JSON):
    {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "password": "secret-engine-1843"
    }

    Responses:
        201: {"token": "...", "user": {...}}
        400: missing or invalid fields
        409: email already in use
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request: Request) -> Response:
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"Registered user {user.id}")
        return Response(
            {"token": get_token_codec().issue(user.id), "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]

        if user is None:
            return Response(
                {"error": _("Invalid email or password.")},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        return Response(
            {"token": get_token_codec().issue(user.id), "user": UserSerializer(user).data}
        )


class MeView(APIView):
    """Current user plus progress keyed by course id."""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        data = dict(UserSerializer(request.user).data)
        records = ProgressAggregator().progress_records(request.user.id)
        data["progress"] = {
            str(course_id): record.to_dict() for course_id, record in records.items()
        }
        return Response(data)
