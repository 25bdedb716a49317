"""
Authentication views.

This module provides the HTTP endpoints of the authentication API:
- Liveness text endpoint
- Registration, login and profile (JSON, camelCase)
- OAuth login-by-redirect (Google, Microsoft) and provider status

Related files:
    - serializers.py: Request/response serialization
    - services.py: AccountService and OAuthBridge business logic
    - adapters.py: allauth adapter used during the provider callback
    - urls.py: URL routing

Note:
    Error bodies ({message, errors}) are produced by
    core.exception_handlers.api_exception_handler; views raise
    core.exceptions subclasses and never build error responses.

    OAuth flow:
    1. GET /api/auth/google-login → redirect to allauth's provider login
    2. Provider → /accounts/google/login/callback/ (allauth verifies the code,
       AccountSocialAdapter links the identity to a local account and
       allauth starts a session)
    3. allauth → /api/auth/oauth-success → bearer token issued, session
       ended, redirect to FRONTEND_URL/oauth-success?token=...
"""

import logging
from urllib.parse import urlencode

from allauth.socialaccount.models import SocialAccount
from django.contrib.auth import logout
from django.http import HttpResponse, HttpResponseRedirect
from django.urls import reverse
from django.views import View
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.conf import get_auth_config
from authentication.serializers import (
    AccountSerializer,
    ErrorSerializer,
    LoginResponseSerializer,
    LoginSerializer,
    MessageSerializer,
    OAuthProvidersSerializer,
    ProfileResponseSerializer,
    RegisterSerializer,
)
from authentication.services import (
    OAUTH_FAILED,
    AccountService,
    OAuthBridge,
    extract_identity,
)
from core.exceptions import UpstreamAuthError

logger = logging.getLogger(__name__)

SERVER_RUNNING_MESSAGE = "Server is running successfully!"
REGISTERED_MESSAGE = "User registered successfully"


def server_test(request):
    """
    Liveness check for the auth API.

    URL: /api/auth/test

    Returns:
        200 text/plain "Server is running successfully!"
    """
    return HttpResponse(SERVER_RUNNING_MESSAGE, content_type="text/plain")


# =============================================================================
# Registration, Login & Profile
# =============================================================================


class RegisterView(APIView):
    """
    POST: Create an account.

    URL: /api/auth/register

    Request body:
        {"username", "email", "password", "confirmPassword"}

    Returns:
        200 {"message": "User registered successfully"}
        400 {"message": "Registration failed" | "Username or email already exists",
             "errors": [...]}
    """

    authentication_classes = []
    permission_classes = [AllowAny]
    validation_error_message = "Registration failed"

    @extend_schema(
        summary="Register a new account",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={200: MessageSerializer, 400: ErrorSerializer},
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        AccountService.register(
            username=data["username"],
            email=data["email"],
            password=data["password"],
            confirm_password=data["confirm_password"],
        )
        return Response({"message": REGISTERED_MESSAGE})


class LoginView(APIView):
    """
    POST: Exchange a username/password pair for a bearer token.

    URL: /api/auth/login

    Returns:
        200 {"user": {...}, "token": "...", "tokenExpiration": "..."}
        401 {"message": "Invalid username or password", "errors": []}
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Log in with username and password",
        tags=["Auth"],
        request=LoginSerializer,
        responses={200: LoginResponseSerializer, 401: ErrorSerializer},
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        account, issued = AccountService.login(
            serializer.validated_data["username"],
            serializer.validated_data["password"],
        )
        payload = LoginResponseSerializer(
            {
                "user": account,
                "token": issued.token,
                "token_expiration": issued.expires_at,
            }
        )
        return Response(payload.data)


class ProfileView(APIView):
    """
    GET: Return the account named by the bearer token.

    URL: /api/auth/profile

    Returns:
        200 {"user": {...}}
        401 missing or invalid token
        404 the account no longer exists
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get the current account",
        tags=["Auth"],
        responses={
            200: ProfileResponseSerializer,
            401: ErrorSerializer,
            404: OpenApiResponse(ErrorSerializer, description="Account no longer exists"),
        },
    )
    def get(self, request):
        account = AccountService.get_profile(request.user.id)
        return Response({"user": AccountSerializer(account).data})


# =============================================================================
# OAuth
# =============================================================================


class OAuthLoginView(View):
    """
    GET: Start the OAuth redirect flow for `provider`.

    URL: /api/auth/google-login, /api/auth/microsoft-login

    Redirects to allauth's provider login URL, which redirects on to the
    provider. A provider without credentials sends the browser straight
    back to the frontend with ?error=.
    """

    provider = None

    def get(self, request):
        if not get_auth_config().is_provider_enabled(self.provider):
            message = OAuthBridge.provider_disabled_message(self.provider)
            logger.warning("OAuth login for disabled provider", extra={"provider": self.provider})
            return HttpResponseRedirect(OAuthBridge.frontend_redirect(error=message))

        query = urlencode(
            {"process": "login", "next": reverse("authentication:oauth-success")}
        )
        return HttpResponseRedirect(f"{reverse(f'{self.provider}_login')}?{query}")


class OAuthSuccessView(View):
    """
    GET: Turn the session allauth established into a bearer token.

    URL: /api/auth/oauth-success

    Always redirects to FRONTEND_URL/oauth-success, with ?token= on success
    or ?error= on any failure. The session is ended either way; the API
    itself stays stateless.
    """

    def get(self, request):
        user = request.user
        if not user.is_authenticated:
            return HttpResponseRedirect(OAuthBridge.frontend_redirect(error=OAUTH_FAILED))

        try:
            email, display_name = self._identity(user)
            # The adapter already linked this identity to the session account
            owns_email = (user.email or "").lower() == email
            account = OAuthBridge.resolve_account(
                email, display_name, email_verified=owns_email
            )
            issued = OAuthBridge.complete(account)
        except UpstreamAuthError as exc:
            logger.warning("OAuth completion failed: %s", exc.message)
            return HttpResponseRedirect(OAuthBridge.frontend_redirect(error=exc.message))
        except Exception:
            logger.exception("Unexpected error completing OAuth login")
            return HttpResponseRedirect(OAuthBridge.frontend_redirect(error=OAUTH_FAILED))
        finally:
            logout(request)

        logger.info("OAuth login completed", extra={"account_id": str(account.id)})
        return HttpResponseRedirect(OAuthBridge.frontend_redirect(token=issued.token))

    @staticmethod
    def _identity(user):
        social = (
            SocialAccount.objects.filter(user=user)
            .order_by("-last_login")
            .first()
        )
        if social is None:
            return user.email, user.username
        return extract_identity(social.provider, social.extra_data, fallback_email=user.email)


class OAuthProvidersView(APIView):
    """
    GET: Which OAuth providers are configured.

    URL: /api/auth/oauth-providers

    Returns:
        200 {"google": bool, "microsoft": bool}
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="List configured OAuth providers",
        tags=["Auth - OAuth"],
        responses={200: OAuthProvidersSerializer},
    )
    def get(self, request):
        return Response(get_auth_config().provider_status())
