"""
Base service layer patterns for business logic encapsulation.

Services encapsulate business logic separate from views and models.
Views handle HTTP concerns, models handle data, services handle logic.
Expected failures are raised as core.exceptions subclasses and converted
to HTTP responses by core.exception_handlers.

Usage:
    from core.services import BaseService
    from core.exceptions import DuplicateAccountError

    class AccountService(BaseService):
        @classmethod
        def register(cls, username, email, password):
            with cls.atomic():
                account = Account.objects.create_account(username, email, password)

            cls.get_logger().info("Account registered", extra={"account_id": account.id})
            return account
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Raise core.exceptions subclasses for expected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back. A unique-constraint violation inside
        the block leaves the outer connection usable.

        Example:
            with cls.atomic():
                account = Account.objects.create_account(...)
        """
        with transaction.atomic():
            yield
