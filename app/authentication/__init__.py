"""
Authentication application.

This app provides account registration, credential validation, bearer token
issuance and OAuth (Google, Microsoft) login-by-redirect.

Key components:
    - Account model: username/password account with case-insensitive uniqueness
    - AccountService: registration, credential validation, profile lookup
    - TokenService: HS256 JWT issue/validate
    - OAuthBridge / AccountSocialAdapter: map provider identities to accounts

Usage:
    from authentication.models import Account
    from authentication.services import AccountService
    from authentication.tokens import TokenService
"""
