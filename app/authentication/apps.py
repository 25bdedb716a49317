"""
Django app configuration for authentication.
"""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Configuration for the authentication application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
    verbose_name = "Authentication"

    def ready(self):
        """
        Validate the auth settings when the app registry is ready.

        A short signing key or a missing issuer/audience stops the process
        at startup instead of failing on the first login.
        """
        from authentication.conf import validate_auth_config

        validate_auth_config()
