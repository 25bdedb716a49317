"""
Serializers for the authentication API.

This module provides DRF serializers for:
- Registration and login requests (input validation)
- Account output (the user DTO)
- Response envelopes used by the views and the OpenAPI schema

Wire names are camelCase (confirmPassword, createdAt, lastLoginAt,
tokenExpiration) through core.serializer_mixins.CamelCaseFieldsMixin.

Related files:
    - views.py: Views that use these serializers
    - services.py: Business rules (password policy, duplicates)

Security:
    - Password fields are write-only and never trimmed
    - The password hash is not part of any output serializer
"""

from rest_framework import serializers

from authentication.models import (
    EMAIL_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    Account,
    validate_username_format,
)
from core.serializer_mixins import CamelCaseFieldsMixin

PASSWORD_MAX_LENGTH = 100


class AccountSerializer(CamelCaseFieldsMixin, serializers.ModelSerializer):
    """
    Account output: {id, username, email, createdAt, lastLoginAt}.
    """

    class Meta:
        model = Account
        fields = ["id", "username", "email", "created_at", "last_login_at"]
        read_only_fields = fields


class RegisterSerializer(CamelCaseFieldsMixin, serializers.Serializer):
    """
    Registration request.

    Request body:
        {
            "username": "alice",
            "email": "alice@example.com",
            "password": "Passw0rd",
            "confirmPassword": "Passw0rd"
        }

    Only field formats are checked here. The password policy and the
    duplicate check belong to AccountService.register.
    """

    username = serializers.CharField(
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        validators=[validate_username_format],
    )
    email = serializers.EmailField(max_length=EMAIL_MAX_LENGTH)
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        max_length=PASSWORD_MAX_LENGTH,
        style={"input_type": "password"},
    )
    confirm_password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        max_length=PASSWORD_MAX_LENGTH,
        style={"input_type": "password"},
    )


class LoginSerializer(serializers.Serializer):
    """
    Login request: {"username": "...", "password": "..."}.

    No format rules beyond length: a malformed username simply fails
    credential validation like any other unknown name.
    """

    username = serializers.CharField(max_length=USERNAME_MAX_LENGTH)
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        max_length=PASSWORD_MAX_LENGTH,
        style={"input_type": "password"},
    )


# =============================================================================
# Response serializers
# =============================================================================


class MessageSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    message = serializers.CharField()
    errors = serializers.ListField(child=serializers.CharField())


class LoginResponseSerializer(CamelCaseFieldsMixin, serializers.Serializer):
    """{user, token, tokenExpiration}"""

    user = AccountSerializer()
    token = serializers.CharField()
    token_expiration = serializers.DateTimeField()


class ProfileResponseSerializer(serializers.Serializer):
    user = AccountSerializer()


class OAuthProvidersSerializer(serializers.Serializer):
    google = serializers.BooleanField()
    microsoft = serializers.BooleanField()
