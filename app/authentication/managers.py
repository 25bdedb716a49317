"""
Account manager acting as the account repository.

Views and services never build Account querysets themselves; they go through
these methods so the lookup rules (case-insensitive username and email,
tolerant id parsing) live in one place.

Related files:
    - models.py: Account model that uses this manager

Security:
    - Passwords are hashed via set_password()
    - Accounts created without a password get an unusable password
"""

from django.contrib.auth.base_user import BaseUserManager
from django.utils import timezone

from core.helpers import validate_uuid


class AccountManager(BaseUserManager):
    """
    Repository-style manager for the Account model.

    Usage:
        account = Account.objects.create_account(
            username="alice",
            email="alice@example.com",
            password="Passw0rd",
        )
        Account.objects.find_by_username("ALICE")  # same account
    """

    def find_by_username(self, username):
        """Return the account with this username (any case), or None."""
        if not username:
            return None
        return self.filter(username__iexact=username).first()

    def find_by_email(self, email):
        """Return the account with this email (any case), or None."""
        if not email:
            return None
        return self.filter(email__iexact=email).first()

    def find_by_id(self, account_id):
        """
        Return the account with this id, or None.

        Malformed ids (not a UUID) are treated as unknown rather than raising.
        """
        if not validate_uuid(account_id):
            return None
        return self.filter(pk=account_id).first()

    def exists_username(self, username) -> bool:
        return self.filter(username__iexact=username).exists()

    def exists_email(self, email) -> bool:
        return self.filter(email__iexact=email).exists()

    def create_account(self, username, email, password=None, **extra_fields):
        """
        Create and save an account.

        Args:
            username: Login name (already validated by the caller)
            email: Email address; the domain part is lower-cased
            password: Plain-text password, or None for OAuth accounts

        Returns:
            Account: The created account

        Raises:
            ValueError: If username or email is empty
            django.db.IntegrityError: If the username or email is taken
                (case-insensitive unique constraints)
        """
        if not username:
            raise ValueError("The username must be set")
        if not email:
            raise ValueError("The email must be set")

        account = self.model(
            username=username,
            email=self.normalize_email(email),
            **extra_fields,
        )
        if password:
            account.set_password(password)
        else:
            account.set_unusable_password()

        account.save(using=self._db)
        return account

    def update_last_login(self, account, when=None):
        """
        Record a successful credential validation.

        Writes last_login_at and clears the lockout bookkeeping in a single
        UPDATE, then mirrors the values onto the passed instance.
        """
        when = when or timezone.now()
        self.filter(pk=account.pk).update(
            last_login_at=when,
            failed_login_count=0,
            lockout_until=None,
        )
        account.last_login_at = when
        account.failed_login_count = 0
        account.lockout_until = None
        return account
