"""
Bearer token issuance and validation.

Tokens are HS256 JWTs produced by djangorestframework-simplejwt. The signing
key, issuer and audience come from AuthConfig, so a settings override is
honoured by both signing and verification; no leeway is allowed.

Claims:
    sub         account id (string)
    username    account username
    email       account email
    jti         unique token id
    iss / aud   configured issuer and audience
    iat / exp   issue time and expiry (exp = iat + JWT_EXPIRY_HOURS)
    token_type  "access"

Related files:
    - authentication.py: DRF authentication class built on TokenService.decode
    - conf.py: signing key, issuer, audience and token lifetime
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import TYPE_CHECKING

from rest_framework_simplejwt.backends import TokenBackend
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.utils import datetime_from_epoch

from authentication.conf import AuthConfig, get_auth_config
from core.exceptions import InvalidTokenError

if TYPE_CHECKING:
    from authentication.models import Account

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


@lru_cache(maxsize=4)
def token_backend_for(config: AuthConfig) -> TokenBackend:
    return TokenBackend(
        api_settings.ALGORITHM,
        signing_key=config.signing_key,
        audience=config.audience,
        issuer=config.issuer,
        leeway=0,
    )


class AccountAccessToken(AccessToken):
    """Access token carrying the account's username and email."""

    @property
    def token_backend(self) -> TokenBackend:
        return token_backend_for(get_auth_config())

    def get_token_backend(self) -> TokenBackend:
        return self.token_backend

    @classmethod
    def for_account(cls, account: Account, lifetime=None) -> AccountAccessToken:
        token = cls.for_user(account)
        if lifetime is not None:
            token.set_exp(lifetime=lifetime)
        token["username"] = account.username
        token["email"] = account.email
        return token


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


class TokenService:
    """
    Issue and validate account bearer tokens.

    Usage:
        issued = TokenService.issue(account)
        claims = TokenService.validate(issued.token)
        claims["sub"] == str(account.id)
    """

    @staticmethod
    def issue(account: Account) -> IssuedToken:
        """
        Sign a new token for the account.

        Returns:
            IssuedToken with the encoded JWT and its expiry instant (UTC)
        """
        config = get_auth_config()
        token = AccountAccessToken.for_account(account, lifetime=config.token_lifetime)
        issued = IssuedToken(
            token=str(token),
            expires_at=datetime_from_epoch(token["exp"]),
        )
        logger.debug(
            "Token issued",
            extra={"account_id": str(account.id), "jti": token[api_settings.JTI_CLAIM]},
        )
        return issued

    @staticmethod
    def decode(raw_token) -> AccountAccessToken:
        """
        Verify signature, expiry, issuer, audience and token type.

        Raises:
            InvalidTokenError: on any verification failure
        """
        if isinstance(raw_token, bytes):
            raw_token = raw_token.decode("utf-8", errors="replace")
        if not raw_token:
            raise InvalidTokenError(INVALID_TOKEN_MESSAGE)

        try:
            token = AccountAccessToken(raw_token)
        except TokenError as exc:
            logger.info("Rejected bearer token: %s", exc)
            raise InvalidTokenError(INVALID_TOKEN_MESSAGE) from exc

        if not token.get(api_settings.USER_ID_CLAIM):
            raise InvalidTokenError(INVALID_TOKEN_MESSAGE)
        return token

    @classmethod
    def validate(cls, raw_token) -> dict:
        """Return the verified claims of `raw_token` as a plain dict."""
        return dict(cls.decode(raw_token).payload)
