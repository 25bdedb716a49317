"""
Custom adapter for django-allauth social authentication.

allauth owns the OAuth handshake (authorization redirect, code exchange,
identity verification, state/CSRF). This adapter plugs the verified identity
into the local account store before allauth would run its own signup.

Related files:
    - services.py: OAuthBridge and extract_identity
    - views.py: OAuthSuccessView issues the bearer token afterwards
    - settings.py: SOCIALACCOUNT_ADAPTER

Behavior:
    - Existing account with the same provider-verified email → the social
      login is linked to it; an unverified email is rejected
    - No account → one is auto-registered with an unusable password
    - Missing email or creation failure → the browser is sent back to the
      frontend with ?error=<message>
"""

import logging

from allauth.core.exceptions import ImmediateHttpResponse
from allauth.socialaccount.adapter import DefaultSocialAccountAdapter
from django.http import HttpResponseRedirect

from authentication.services import (
    OAUTH_FAILED,
    OAuthBridge,
    extract_identity,
    is_email_verified,
)
from core.exceptions import UpstreamAuthError

logger = logging.getLogger(__name__)


def _frontend_error(message):
    return ImmediateHttpResponse(
        HttpResponseRedirect(OAuthBridge.frontend_redirect(error=message))
    )


class AccountSocialAdapter(DefaultSocialAccountAdapter):
    """
    Link provider identities to accounts by email.

    Usage:
        Configure in settings.py:
        SOCIALACCOUNT_ADAPTER = 'authentication.adapters.AccountSocialAdapter'
    """

    def pre_social_login(self, request, sociallogin):
        """
        Resolve the local account for the incoming identity and connect it.

        Args:
            request: The HTTP request (provider callback)
            sociallogin: allauth SocialLogin with the verified identity

        Raises:
            ImmediateHttpResponse: Redirect to the frontend error page
        """
        if sociallogin.is_existing:
            return

        provider = sociallogin.account.provider
        fallback_email = getattr(sociallogin.user, "email", None)
        try:
            extra_data = sociallogin.account.extra_data
            email, display_name = extract_identity(
                provider, extra_data, fallback_email=fallback_email
            )
            verified = is_email_verified(
                provider, extra_data, email, sociallogin.email_addresses
            )
            account = OAuthBridge.resolve_account(
                email, display_name, email_verified=verified
            )
        except UpstreamAuthError as exc:
            logger.warning(
                "Social login rejected",
                extra={"provider": provider, "error": exc.message},
            )
            raise _frontend_error(exc.message) from exc

        sociallogin.connect(request, account)
        logger.info(
            "Social account linked",
            extra={"provider": provider, "account_id": str(account.id)},
        )

    def on_authentication_error(
        self, request, provider, error=None, exception=None, extra_context=None
    ):
        """
        Send provider-side failures (denied consent, bad state) to the frontend.
        """
        logger.error(
            "Social authentication error",
            extra={
                "provider": getattr(provider, "id", provider),
                "error": error,
                "exception": str(exception) if exception else None,
            },
            exc_info=exception,
        )
        raise _frontend_error(OAUTH_FAILED)
