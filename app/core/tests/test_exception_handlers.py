"""
Tests for api_exception_handler and flatten_errors.

The handler is called directly with a minimal DRF context; view
integration is covered by the authentication view tests.
"""

import logging

import pytest
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions

from core.exception_handlers import api_exception_handler, flatten_errors
from core.exceptions import InvalidTokenError, NotFoundError, ValidationError


class RegistrationLikeView:
    validation_error_message = "Registration failed"


class TestFlattenErrors:
    def test_field_errors_prefixed(self):
        detail = {"email": ["Enter a valid email address."], "username": ["Too short.", "Bad."]}

        assert flatten_errors(detail) == [
            "email: Enter a valid email address.",
            "username: Too short.",
            "username: Bad.",
        ]

    def test_non_field_errors_not_prefixed(self):
        assert flatten_errors({"non_field_errors": ["Passwords differ."]}) == ["Passwords differ."]

    def test_plain_list(self):
        assert flatten_errors(["one", "two"]) == ["one", "two"]


class TestApplicationErrors:
    def test_status_and_body_from_exception(self):
        response = api_exception_handler(NotFoundError("User not found"), {})

        assert response.status_code == 404
        assert response.data == {"message": "User not found", "errors": []}

    def test_validation_errors_listed(self):
        exc = ValidationError("Registration failed", errors=["Password too short."])

        response = api_exception_handler(exc, {})

        assert response.status_code == 400
        assert response.data["errors"] == ["Password too short."]

    def test_invalid_token_sets_authenticate_header(self):
        response = api_exception_handler(InvalidTokenError("Invalid or expired token"), {})

        assert response.status_code == 401
        assert response["WWW-Authenticate"].startswith("Bearer")


class TestDrfErrors:
    def test_serializer_errors_use_view_message(self):
        exc = exceptions.ValidationError({"username": ["This field is required."]})

        response = api_exception_handler(exc, {"view": RegistrationLikeView()})

        assert response.status_code == 400
        assert response.data == {
            "message": "Registration failed",
            "errors": ["username: This field is required."],
        }

    def test_serializer_errors_default_message(self):
        exc = exceptions.ValidationError({"password": ["This field is required."]})

        response = api_exception_handler(exc, {"view": object()})

        assert response.data["message"] == "Validation failed"

    def test_not_authenticated(self):
        response = api_exception_handler(exceptions.NotAuthenticated(), {})

        assert response.status_code == 401
        assert response.data == {
            "message": "Authentication credentials were not provided.",
            "errors": [],
        }

    def test_method_not_allowed(self):
        response = api_exception_handler(exceptions.MethodNotAllowed("GET"), {})

        assert response.status_code == 405
        assert response.data["errors"] == []

    def test_django_404(self):
        response = api_exception_handler(Http404("gone"), {})

        assert response.status_code == 404
        assert set(response.data) == {"message", "errors"}


class TestUnexpectedErrors:
    def test_generic_500_hides_detail(self, settings):
        settings.DEBUG = False

        response = api_exception_handler(DatabaseError("connection refused"), {})

        assert response.status_code == 500
        assert response.data == {
            "message": "An internal server error occurred",
            "errors": [],
        }

    def test_debug_includes_detail(self, settings):
        settings.DEBUG = True

        response = api_exception_handler(RuntimeError("boom"), {})

        assert response.data["errors"] == ["boom"]

    def test_logged_with_traceback(self, caplog):
        with caplog.at_level(logging.ERROR, logger="core.exception_handlers"):
            api_exception_handler(RuntimeError("boom"), {})

        assert caplog.records[0].exc_info is not None
