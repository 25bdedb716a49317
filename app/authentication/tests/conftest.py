"""
Test configuration and fixtures for authentication tests.

This module provides:
- Account fixtures
- API client helpers for bearer-authenticated requests
- Test data fixtures

Usage:
    def test_example(account, authenticated_client):
        response = authenticated_client.get("/api/auth/profile")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient

from authentication.conf import get_auth_config
from authentication.tests.factories import DEFAULT_PASSWORD, AccountFactory
from authentication.tokens import TokenService


@pytest.fixture(autouse=True)
def fresh_auth_config():
    """Rebuild the auth settings snapshot around every test."""
    get_auth_config.cache_clear()
    yield
    get_auth_config.cache_clear()


# =============================================================================
# Account Fixtures
# =============================================================================


@pytest.fixture
def password():
    """Password of the default account fixture."""
    return DEFAULT_PASSWORD


@pytest.fixture
def account(db):
    """Create a basic active account with a usable password."""
    return AccountFactory(username="alice", email="alice@example.com")


@pytest.fixture
def oauth_account(db):
    """Create an account that was auto-registered through OAuth (no password)."""
    return AccountFactory(username="oauth_user", email="oauth@example.com", password=None)


@pytest.fixture
def inactive_account(db):
    """Create a deactivated account."""
    return AccountFactory(username="inactive", email="inactive@example.com", is_active=False)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client(account):
    """
    API client carrying a bearer token for the default account fixture.
    """
    client = APIClient()
    issued = TokenService.issue(account)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issued.token}")
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create bearer-authenticated clients for any account.

    Usage:
        def test_example(authenticated_client_factory, some_account):
            client = authenticated_client_factory(some_account)
            response = client.get("/api/auth/profile")
    """

    def _make_client(account):
        client = APIClient()
        issued = TokenService.issue(account)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issued.token}")
        return client

    return _make_client


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def valid_registration_data():
    """Valid body for the registration endpoint."""
    return {
        "username": "newuser",
        "email": "newuser@example.com",
        "password": "Passw0rd",
        "confirmPassword": "Passw0rd",
    }


@pytest.fixture
def google_extra_data():
    """Identity data as allauth stores it for a Google login."""
    return {
        "sub": "google-uid-123",
        "email": "GoogleUser@Gmail.com",
        "email_verified": True,
        "name": "Google User",
        "given_name": "Google",
        "family_name": "User",
    }


@pytest.fixture
def microsoft_extra_data():
    """Identity data as allauth stores it for a Microsoft Graph login."""
    return {
        "id": "ms-uid-456",
        "mail": None,
        "userPrincipalName": "ms.user@contoso.com",
        "displayName": "MS User",
    }
