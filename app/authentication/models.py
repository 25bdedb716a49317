"""
Authentication models.

This module defines the Account model, the single persisted entity of the
authentication API: a username/password (or OAuth-created) account.

Related files:
    - managers.py: AccountManager (repository operations)
    - services.py: AccountService and OAuthBridge business logic
    - validators.py: Password policy validators

Security:
    - Passwords hashed by Django's configured hasher (Argon2 first)
    - The hash never leaves this model; serializers do not expose it
    - Username and email uniqueness is case-insensitive and enforced
      by database constraints
"""

from django.contrib.auth.base_user import AbstractBaseUser
from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models
from django.db.models.functions import Lower
from django.utils import timezone

from authentication.managers import AccountManager
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100

validate_username_format = RegexValidator(
    regex=r"^[a-zA-Z0-9_]+$",
    message="Username can only contain letters, numbers, and underscores.",
    code="invalid_username",
)


class Account(UUIDPrimaryKeyMixin, AbstractBaseUser, BaseModel):
    """
    Account identified by a unique username.

    Fields:
        id: UUID primary key, exposed to clients as an opaque string
        username: 3-50 chars, letters/digits/underscore, unique (case-insensitive)
        email: unique (case-insensitive)
        password: hash produced by the configured password hasher
        created_at / updated_at: from BaseModel
        last_login_at: set only by a successful credential validation
        failed_login_count / lockout_until: lockout bookkeeping
        is_active: inactive accounts cannot log in

    Note:
        Django's own `last_login` column is removed. Session logins (the
        OAuth redirect flow) must not count as a credential validation.
    """

    username = models.CharField(
        max_length=USERNAME_MAX_LENGTH,
        validators=[MinLengthValidator(USERNAME_MIN_LENGTH), validate_username_format],
        help_text="Login name, 3-50 characters: letters, numbers and underscores",
    )
    email = models.EmailField(
        max_length=EMAIL_MAX_LENGTH,
        help_text="Contact email, also used to match OAuth identities",
    )

    last_login = None
    last_login_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the account last passed a credential check",
    )

    failed_login_count = models.PositiveIntegerField(
        default=0,
        help_text="Consecutive failed password attempts",
    )
    lockout_until = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Password logins are refused until this time",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this account may log in. Deselect instead of deleting.",
    )

    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    objects = AccountManager()

    class Meta:
        verbose_name = "account"
        verbose_name_plural = "accounts"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                Lower("username"),
                name="account_username_ci_unique",
                violation_error_message="Username already exists",
            ),
            models.UniqueConstraint(
                Lower("email"),
                name="account_email_ci_unique",
                violation_error_message="Email already exists",
            ),
        ]

    def __str__(self):
        return self.username

    def is_locked_out(self, now=None) -> bool:
        """Return True while a lockout window is in effect."""
        if self.lockout_until is None:
            return False
        return self.lockout_until > (now or timezone.now())
