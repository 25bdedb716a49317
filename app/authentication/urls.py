"""
URL configuration for authentication app.

Mounted at /api/auth/ by config/urls.py. Every route accepts both the
bare and the trailing-slash form.

URL structure:
    /api/auth/test               - Liveness text (GET)
    /api/auth/register           - Create account (POST)
    /api/auth/login              - Username/password → bearer token (POST)
    /api/auth/profile            - Current account (GET, bearer token)
    /api/auth/google-login       - Start Google OAuth redirect (GET)
    /api/auth/microsoft-login    - Start Microsoft OAuth redirect (GET)
    /api/auth/oauth-success      - OAuth landing → frontend redirect (GET)
    /api/auth/oauth-providers    - Configured providers (GET)

Note:
    The provider callbacks themselves are allauth's, under /accounts/.
"""

from django.urls import re_path

from authentication.views import (
    LoginView,
    OAuthLoginView,
    OAuthProvidersView,
    OAuthSuccessView,
    ProfileView,
    RegisterView,
    server_test,
)

app_name = "authentication"

urlpatterns = [
    re_path(r"^test/?$", server_test, name="test"),
    re_path(r"^register/?$", RegisterView.as_view(), name="register"),
    re_path(r"^login/?$", LoginView.as_view(), name="login"),
    re_path(r"^profile/?$", ProfileView.as_view(), name="profile"),
    # OAuth
    re_path(
        r"^google-login/?$",
        OAuthLoginView.as_view(provider="google"),
        name="google-login",
    ),
    re_path(
        r"^microsoft-login/?$",
        OAuthLoginView.as_view(provider="microsoft"),
        name="microsoft-login",
    ),
    re_path(r"^oauth-success/?$", OAuthSuccessView.as_view(), name="oauth-success"),
    re_path(r"^oauth-providers/?$", OAuthProvidersView.as_view(), name="oauth-providers"),
]
