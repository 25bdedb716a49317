"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent {message, errors} response bodies across the API
- Machine-readable error codes for logging and client handling
- A single place that decides the HTTP status of each failure kind

Exception Hierarchy:
    BaseApplicationError (base, 400)
    ├── ValidationError - Input validation / password policy failures (400)
    ├── DuplicateAccountError - Username or email already registered (400)
    ├── AuthenticationError - Bad credentials (401)
    │   └── InvalidTokenError - Bad, expired or foreign bearer token (401)
    ├── NotFoundError - Resource not found (404)
    └── UpstreamAuthError - OAuth provider/identity failures (502)

Usage:
    from core.exceptions import ValidationError, NotFoundError

    # Raise with message only
    raise NotFoundError("User not found")

    # Raise with the list of reasons shown to the client
    raise ValidationError(
        "Registration failed",
        errors=["Password must contain at least one digit."],
    )

Note:
    core.exception_handlers.api_exception_handler converts these to
    HTTP responses; views never build error bodies by hand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for logging and client handling
        errors: Individual reasons, each a human-readable string
        details: Additional context for logs (never sent to clients)
        status_code: HTTP status used by the API exception handler
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.errors = list(errors or [])
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to the API error body.

        Returns:
            {"message": "...", "errors": ["...", ...]}
        """
        return {"message": self.message, "errors": list(self.errors)}

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"errors={self.errors!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for service-layer validation such as the password policy or a
    confirmation mismatch. Each failing rule is one entry in `errors`.
    """

    default_error_code: str = "VALIDATION_ERROR"


class DuplicateAccountError(BaseApplicationError):
    """
    Raised when a username or email is already registered.

    Also raised when the database unique constraint rejects a concurrent
    registration that passed the pre-check.
    """

    default_error_code: str = "DUPLICATE_ACCOUNT"


class AuthenticationError(BaseApplicationError):
    """
    Raised when credentials cannot be validated.

    The message is deliberately the same for an unknown username, a wrong
    password and a locked account.
    """

    default_error_code: str = "AUTHENTICATION_FAILED"
    status_code: int = 401


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token fails signature, expiry, issuer or audience checks."""

    default_error_code: str = "INVALID_TOKEN"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        account = Account.objects.find_by_id(account_id)
        if account is None:
            raise NotFoundError("User not found", details={"account_id": account_id})
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class UpstreamAuthError(BaseApplicationError):
    """
    Raised when an OAuth provider round-trip cannot produce a local account.

    Covers a missing email in the identity assertion and failures to
    auto-register the account. The OAuth endpoints turn it into a frontend
    redirect carrying ?error=<message>.
    """

    default_error_code: str = "UPSTREAM_AUTH_ERROR"
    status_code: int = 502
