"""
Helper functions for common infrastructure operations.

This module provides domain-agnostic utility functions for:
- UUID validation
- Redirect URL construction with query parameters

Usage:
    from core.helpers import append_query, validate_uuid

    url = append_query("http://localhost:5174/oauth-success", token="...")
"""

from __future__ import annotations

import uuid
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def validate_uuid(value) -> bool:
    """
    Check if value is a valid UUID.

    Example:
        is_valid = validate_uuid("550e8400-e29b-41d4-a716-446655440000")  # True
    """
    if isinstance(value, uuid.UUID):
        return True
    try:
        uuid.UUID(str(value))
        return True
    except (ValueError, TypeError, AttributeError):
        return False


def append_query(url: str, **params: str) -> str:
    """
    Return `url` with the given query parameters added (URL-encoded).

    Parameters whose value is None are skipped. Existing query parameters
    on `url` are kept.

    Example:
        >>> append_query("http://localhost:5174/oauth-success", error="No email")
        'http://localhost:5174/oauth-success?error=No+email'
    """
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.extend((key, value) for key, value in params.items() if value is not None)
    return urlunsplit(parts._replace(query=urlencode(query)))
