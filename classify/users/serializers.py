"""
Classify User Serializers

Serializers:
- RegistrationSerializer: Validates sign-up data and creates the user
- LoginSerializer: Validates email/password credentials
- UserSerializer: Public user representation returned with tokens

Author: Classify Development Team
Version: 1.0.0
"""

from typing import Any, Dict

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from ..exceptions import Conflict
from .models import Profile

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public user data: id, names, email and platform role."""

    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ("id", "first_name", "last_name", "email", "role")
        read_only_fields = fields

    def get_role(self, obj) -> str:
        try:
            return obj.profile.role
        except Profile.DoesNotExist:
            return Profile.Role.STUDENT


class RegistrationSerializer(serializers.Serializer):
    """
    Sign-up data for a new student account.

    The email doubles as the username. A duplicate email is a Conflict (409),
    not a validation error.
    """

    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        candidate = User(
            username=attrs["email"],
            email=attrs["email"],
            first_name=attrs["first_name"],
            last_name=attrs["last_name"],
        )
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({"password": list(e.messages)})
        return attrs

    def create(self, validated_data: Dict[str, Any]):
        email = validated_data["email"]
        if User.objects.filter(email__iexact=email).exists():
            raise Conflict(_("Email already in use."))

        # A concurrent registration can still win the race on the unique username
        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=validated_data["password"],
                    first_name=validated_data["first_name"],
                    last_name=validated_data["last_name"],
                )
        except IntegrityError:
            raise Conflict(_("Email already in use."))
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        email = attrs["email"].strip().lower()
        user = authenticate(
            request=self.context.get("request"),
            username=email,
            password=attrs["password"],
        )
        attrs["user"] = user
        return attrs
