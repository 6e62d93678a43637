"""Serializers for the core app.

Contains serializers for User and Role plus the authentication payloads
(signup, login, refresh, logout). Follows the Read/Write serializer split.
"""

from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from rest_framework import serializers
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from clinic_backend.core.exceptions import Conflict
from clinic_backend.core.models import Role, User


# -----------------------------------------------------------------------------
# Role / User Serializers
# -----------------------------------------------------------------------------


class UserSerializer(serializers.ModelSerializer):
    """Read-only user representation; ``role`` is the role name."""

    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name', 'role']
        read_only_fields = fields

    def get_role(self, obj):
        return obj.role_name


class UserBriefSerializer(serializers.ModelSerializer):
    """Embedded user (nurse/doctor) inside other resources."""

    class Meta:
        model = User
        fields = ['id', 'first_name', 'last_name']
        read_only_fields = fields


# -----------------------------------------------------------------------------
# Authentication Serializers
# -----------------------------------------------------------------------------


class SignupSerializer(serializers.Serializer):
    """Create an account with a fixed clinic role."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    role = serializers.ChoiceField(
        choices=Role.NAMES,
        error_messages={'invalid_choice': 'Invalid role. Must be doctor or nurse'},
    )

    def validate_email(self, value):
        return value.strip().lower()

    def validate_password(self, value):
        try:
            password_validation.validate_password(value)
        except DjangoValidationError as e:
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        email = validated_data['email']
        if User.objects.filter(email__iexact=email).exists():
            raise Conflict('User already exists. Please log in instead.')

        role, _ = Role.objects.get_or_create(
            name=validated_data['role'],
            defaults={'label': validated_data['role'].capitalize()},
        )
        try:
            with transaction.atomic():
                return User.objects.create_user(
                    username=email,
                    email=email,
                    password=validated_data['password'],
                    first_name=validated_data['first_name'],
                    last_name=validated_data['last_name'],
                    role=role,
                )
        except IntegrityError:
            # concurrent signup with the same email
            raise Conflict('User already exists. Please log in instead.')


class LoginSerializer(serializers.Serializer):
    """Credentials for login; authentication itself happens in the view."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate_email(self, value):
        return value.strip().lower()


class RefreshSerializer(serializers.Serializer):
    """Validates a refresh token string."""

    refresh = serializers.CharField(required=True)

    def validate_refresh(self, value):
        try:
            RefreshToken(value)
        except TokenError as e:
            raise serializers.ValidationError(f'Invalid or expired refresh token: {e}')
        return value
