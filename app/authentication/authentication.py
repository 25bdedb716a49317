"""
DRF authentication class for `Authorization: Bearer <token>`.

The request user is a stateless simplejwt TokenUser built from the claims;
no database lookup happens here. The profile view looks the account up and
answers 404 when a valid token names an account that no longer exists.
"""

from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication

from authentication.tokens import TokenService
from core.exceptions import InvalidTokenError


class BearerTokenAuthentication(JWTStatelessUserAuthentication):
    """
    Validate bearer tokens through TokenService.

    Missing header → no authentication (permission classes answer 401).
    Present but invalid token → 401 with WWW-Authenticate: Bearer.
    """

    www_authenticate_realm = "api"

    def get_validated_token(self, raw_token):
        try:
            return TokenService.decode(raw_token)
        except InvalidTokenError as exc:
            raise exceptions.AuthenticationFailed(exc.message, code="token_not_valid")
