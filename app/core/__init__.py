"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks shared by the domain apps. No
account-specific logic lives here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer (logger, atomic)

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error code and HTTP status
    - ValidationError, DuplicateAccountError, AuthenticationError,
      InvalidTokenError, NotFoundError, UpstreamAuthError

Exception handling (import from core.exception_handlers):
    - api_exception_handler: DRF EXCEPTION_HANDLER producing {message, errors}

Helpers (import from core.helpers):
    - validate_uuid, append_query

Views (import from core.views):
    - health_check: Database health endpoint

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService

# Exceptions (no Django dependencies)
from .exceptions import (
    AuthenticationError,
    BaseApplicationError,
    DuplicateAccountError,
    InvalidTokenError,
    NotFoundError,
    UpstreamAuthError,
    ValidationError,
)

# Helpers (no Django model dependencies)
from .helpers import append_query, validate_uuid

__all__ = [
    # Services
    "BaseService",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "DuplicateAccountError",
    "AuthenticationError",
    "InvalidTokenError",
    "NotFoundError",
    "UpstreamAuthError",
    # Helpers
    "append_query",
    "validate_uuid",
]
