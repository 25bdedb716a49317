"""
Immutable snapshot of the authentication settings.

Django settings are read once into a frozen AuthConfig and shared by the token
service, the OAuth bridge and the views. The snapshot is rebuilt when a test
overrides one of the underlying settings.

Usage:
    from authentication.conf import get_auth_config

    config = get_auth_config()
    config.token_lifetime      # timedelta
    config.google_enabled      # bool

Startup validation:
    AuthenticationConfig.ready() calls validate_auth_config(), which raises
    ImproperlyConfigured listing every missing or invalid setting.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver

MIN_SIGNING_KEY_LENGTH = 32
MIN_EXPIRY_HOURS = 1
MAX_EXPIRY_HOURS = 8760

_WATCHED_SETTINGS = frozenset(
    {
        "JWT_SIGNING_KEY",
        "JWT_ISSUER",
        "JWT_AUDIENCE",
        "JWT_EXPIRY_HOURS",
        "FRONTEND_URL",
        "GOOGLE_CLIENT_ID",
        "GOOGLE_CLIENT_SECRET",
        "MICROSOFT_CLIENT_ID",
        "MICROSOFT_CLIENT_SECRET",
        "AUTH_LOCKOUT_MAX_FAILED_ATTEMPTS",
        "AUTH_LOCKOUT_MINUTES",
    }
)


@dataclass(frozen=True)
class AuthConfig:
    signing_key: str
    issuer: str
    audience: str
    expiry_hours: int
    frontend_url: str
    google_enabled: bool
    microsoft_enabled: bool
    lockout_max_failed_attempts: int
    lockout_minutes: int

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(hours=self.expiry_hours)

    @property
    def lockout_duration(self) -> timedelta:
        return timedelta(minutes=self.lockout_minutes)

    @property
    def lockout_enabled(self) -> bool:
        return self.lockout_max_failed_attempts > 0

    @property
    def oauth_success_url(self) -> str:
        """Frontend page that receives ?token= or ?error= after an OAuth login."""
        return f"{self.frontend_url.rstrip('/')}/oauth-success"

    def provider_status(self) -> dict[str, bool]:
        return {"google": self.google_enabled, "microsoft": self.microsoft_enabled}

    def is_provider_enabled(self, provider: str) -> bool:
        return self.provider_status().get(provider, False)


def _configured(*names: str) -> bool:
    return all(getattr(settings, name, "") for name in names)


@lru_cache(maxsize=1)
def get_auth_config() -> AuthConfig:
    """Build (once) and return the AuthConfig for the current settings."""
    return AuthConfig(
        signing_key=getattr(settings, "JWT_SIGNING_KEY", "") or "",
        issuer=getattr(settings, "JWT_ISSUER", "") or "",
        audience=getattr(settings, "JWT_AUDIENCE", "") or "",
        expiry_hours=int(getattr(settings, "JWT_EXPIRY_HOURS", 24)),
        frontend_url=getattr(settings, "FRONTEND_URL", "http://localhost:5174"),
        google_enabled=_configured("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"),
        microsoft_enabled=_configured("MICROSOFT_CLIENT_ID", "MICROSOFT_CLIENT_SECRET"),
        lockout_max_failed_attempts=int(
            getattr(settings, "AUTH_LOCKOUT_MAX_FAILED_ATTEMPTS", 5)
        ),
        lockout_minutes=int(getattr(settings, "AUTH_LOCKOUT_MINUTES", 5)),
    )


def validate_auth_config(config: AuthConfig | None = None) -> AuthConfig:
    """
    Fail fast on a configuration the API cannot run with.

    Raises:
        ImproperlyConfigured: naming every problem found
    """
    config = config or get_auth_config()
    problems = []

    if not config.signing_key:
        problems.append("JWT_SIGNING_KEY is not set")
    elif len(config.signing_key) < MIN_SIGNING_KEY_LENGTH:
        problems.append(
            f"JWT_SIGNING_KEY must be at least {MIN_SIGNING_KEY_LENGTH} characters long"
        )
    if not config.issuer:
        problems.append("JWT_ISSUER is not set")
    if not config.audience:
        problems.append("JWT_AUDIENCE is not set")
    if not MIN_EXPIRY_HOURS <= config.expiry_hours <= MAX_EXPIRY_HOURS:
        problems.append(
            f"JWT_EXPIRY_HOURS must be between {MIN_EXPIRY_HOURS} and {MAX_EXPIRY_HOURS}"
        )
    if config.lockout_max_failed_attempts < 0 or config.lockout_minutes < 0:
        problems.append("AUTH_LOCKOUT_* settings must not be negative")

    if problems:
        raise ImproperlyConfigured(
            "Invalid authentication configuration: " + "; ".join(problems)
        )
    return config


@receiver(setting_changed)
def _reset_auth_config(*, setting, **kwargs):
    if setting in _WATCHED_SETTINGS:
        get_auth_config.cache_clear()
