"""
Tests for the auth settings snapshot and startup validation.
"""

from dataclasses import FrozenInstanceError, replace
from datetime import timedelta

import pytest
from django.core.exceptions import ImproperlyConfigured

from authentication.conf import AuthConfig, get_auth_config, validate_auth_config


@pytest.fixture
def config():
    return AuthConfig(
        signing_key="k" * 32,
        issuer="account-api",
        audience="account-api-clients",
        expiry_hours=24,
        frontend_url="http://localhost:5174/",
        google_enabled=True,
        microsoft_enabled=False,
        lockout_max_failed_attempts=5,
        lockout_minutes=5,
    )


class TestAuthConfig:
    def test_is_immutable(self, config):
        with pytest.raises(FrozenInstanceError):
            config.issuer = "other"

    def test_derived_values(self, config):
        assert config.token_lifetime == timedelta(hours=24)
        assert config.lockout_duration == timedelta(minutes=5)
        assert config.lockout_enabled is True
        assert config.oauth_success_url == "http://localhost:5174/oauth-success"

    def test_provider_status(self, config):
        assert config.provider_status() == {"google": True, "microsoft": False}
        assert config.is_provider_enabled("google") is True
        assert config.is_provider_enabled("github") is False

    def test_lockout_disabled_with_zero_attempts(self, config):
        assert replace(config, lockout_max_failed_attempts=0).lockout_enabled is False


class TestValidateAuthConfig:
    def test_valid_config_passes(self, config):
        assert validate_auth_config(config) is config

    def test_short_signing_key_rejected(self, config):
        with pytest.raises(ImproperlyConfigured, match="at least 32 characters"):
            validate_auth_config(replace(config, signing_key="short"))

    def test_every_problem_listed(self, config):
        broken = replace(config, signing_key="", issuer="", audience="")

        with pytest.raises(ImproperlyConfigured) as exc_info:
            validate_auth_config(broken)

        message = str(exc_info.value)
        assert "JWT_SIGNING_KEY is not set" in message
        assert "JWT_ISSUER is not set" in message
        assert "JWT_AUDIENCE is not set" in message

    @pytest.mark.parametrize("hours", [0, 8761])
    def test_expiry_out_of_range_rejected(self, config, hours):
        with pytest.raises(ImproperlyConfigured, match="JWT_EXPIRY_HOURS"):
            validate_auth_config(replace(config, expiry_hours=hours))


class TestGetAuthConfig:
    def test_reads_settings(self, settings):
        config = get_auth_config()

        assert config.issuer == settings.JWT_ISSUER
        assert config.audience == settings.JWT_AUDIENCE
        assert config.token_lifetime == timedelta(hours=settings.JWT_EXPIRY_HOURS)

    def test_is_cached(self):
        assert get_auth_config() is get_auth_config()

    def test_rebuilt_when_setting_overridden(self, settings):
        get_auth_config()

        settings.GOOGLE_CLIENT_ID = ""

        assert get_auth_config().google_enabled is False

    def test_default_token_lifetime_is_24_hours(self):
        assert get_auth_config().token_lifetime == timedelta(hours=24)
