"""
Tests for authentication app.

This package contains test modules for:
- test_models.py / test_managers.py: Account model and repository methods
- test_validators.py: Password policy
- test_conf.py: Auth settings snapshot and startup validation
- test_services.py: AccountService and OAuthBridge
- test_tokens.py: TokenService and bearer authentication
- test_adapters.py: allauth social adapter
- test_views.py: API endpoints
- test_integration.py: End-to-end account journeys

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_services.py
"""
