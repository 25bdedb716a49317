"""
URL configuration for the account authentication API.

URL Structure:
    /health/                       - Health check endpoint (load balancers, Docker)
    /api/schema/                   - OpenAPI schema (YAML)
    /api/docs/                     - ReDoc API documentation
    /api/auth/                     - Authentication endpoints
        test                       - Liveness text
        register                   - Account registration
        login                      - Username/password login
        profile                    - Current account (bearer token)
        google-login               - Google OAuth redirect
        microsoft-login            - Microsoft OAuth redirect
        oauth-success              - OAuth completion → frontend redirect
        oauth-providers            - Configured OAuth providers
    /accounts/                     - django-allauth (OAuth provider callbacks)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

urlpatterns = [
    # Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # Authentication API
    path("api/auth/", include("authentication.urls")),
    # allauth: provider login and callback URLs used by the OAuth redirect flow
    path("accounts/", include("allauth.urls")),
]
