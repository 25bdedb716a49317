"""
Authentication services.

This module provides:
    - AccountService: registration, credential validation, login and
      profile lookup
    - OAuthBridge: maps a validated OAuth identity (Google, Microsoft) to a
      local account and issues the bearer token for it
    - extract_identity: reads email and display name from provider data

Related files:
    - models.py / managers.py: Account and its repository methods
    - tokens.py: TokenService used by login and the OAuth bridge
    - adapters.py: allauth adapter calling OAuthBridge during the callback

Security:
    - One failure message for unknown usernames, wrong passwords and
      locked accounts
    - Unknown usernames still pay for one password hash
    - Accounts created through OAuth get an unusable password
    - Uniqueness races are settled by the database constraints
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from django.contrib.auth.hashers import make_password
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from django.db.models import F
from django.utils import timezone

from authentication.conf import get_auth_config
from authentication.models import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH, Account
from authentication.tokens import IssuedToken, TokenService
from core.exceptions import (
    AuthenticationError,
    DuplicateAccountError,
    NotFoundError,
    UpstreamAuthError,
    ValidationError,
)
from core.helpers import append_query
from core.services import BaseService

if TYPE_CHECKING:
    from datetime import datetime

REGISTRATION_FAILED = "Registration failed"
DUPLICATE_ACCOUNT = "Username or email already exists"
INVALID_CREDENTIALS = "Invalid username or password"
PASSWORD_MISMATCH = "Password and confirmation password do not match"
USER_NOT_FOUND = "User not found"

OAUTH_FAILED = "OAuth authentication failed"
OAUTH_CREATE_FAILED = "Failed to create user"
OAUTH_PROVIDER_DISABLED = "{provider} login is not configured"
OAUTH_EMAIL_UNVERIFIED = "Email address is not verified by the provider"

PROVIDER_LABELS = {"google": "Google", "microsoft": "Microsoft"}


class AccountService(BaseService):
    """
    Account business logic.

    Usage:
        from authentication.services import AccountService

        account = AccountService.register("alice", "alice@example.com", "Passw0rd", "Passw0rd")
        account, issued = AccountService.login("alice", "Passw0rd")
        AccountService.get_profile(account.id)
    """

    @classmethod
    def check_password_policy(cls, password, confirm_password=None, account=None) -> list[str]:
        """
        Return every password policy violation (empty list when the password is fine).

        The confirmation check is skipped when confirm_password is None.
        """
        errors: list[str] = []
        try:
            validate_password(password, user=account)
        except DjangoValidationError as exc:
            errors.extend(exc.messages)
        if confirm_password is not None and password != confirm_password:
            errors.append(PASSWORD_MISMATCH)
        return errors

    @classmethod
    def register(cls, username, email, password, confirm_password=None) -> Account:
        """
        Create a new account.

        Args:
            username: 3-50 chars, letters/digits/underscore (format checked
                by the request serializer)
            email: Email address
            password: Plain-text password, checked against the policy
            confirm_password: Must equal password when given

        Returns:
            Account: The persisted account

        Raises:
            ValidationError: One entry per failed password rule
            DuplicateAccountError: Username or email already registered
        """
        logger = cls.get_logger()

        errors = cls.check_password_policy(password, confirm_password)
        if errors:
            raise ValidationError(REGISTRATION_FAILED, errors=errors)

        taken = []
        if Account.objects.exists_username(username):
            taken.append("Username already exists")
        if Account.objects.exists_email(email):
            taken.append("Email already exists")
        if taken:
            logger.info("Registration rejected: duplicate account", extra={"username": username})
            raise DuplicateAccountError(DUPLICATE_ACCOUNT, errors=taken)

        try:
            with cls.atomic():
                account = Account.objects.create_account(username, email, password)
        except IntegrityError as exc:
            # A concurrent registration won the unique constraint
            logger.info("Registration lost uniqueness race", extra={"username": username})
            raise DuplicateAccountError(DUPLICATE_ACCOUNT) from exc

        logger.info(
            "Account registered",
            extra={"account_id": str(account.id), "username": account.username},
        )
        return account

    @classmethod
    def validate_credentials(cls, username, password) -> Account | None:
        """
        Check a username/password pair.

        Returns:
            The account on success, None on any failure. Success updates
            last_login_at and clears the failed-attempt counter; a wrong
            password counts towards the lockout.
        """
        logger = cls.get_logger()
        account = Account.objects.find_by_username(username)

        if account is None or not account.has_usable_password():
            # Equalize timing with the wrong-password path
            make_password(password)
            logger.warning("Login failed: unknown username", extra={"username": username})
            return None

        now = timezone.now()
        if account.is_locked_out(now):
            make_password(password)
            logger.warning(
                "Login refused: account locked",
                extra={"account_id": str(account.id), "lockout_until": account.lockout_until},
            )
            return None

        if not account.check_password(password):
            cls._record_failed_attempt(account, now)
            return None

        if not account.is_active:
            logger.warning("Login refused: inactive account", extra={"account_id": str(account.id)})
            return None

        Account.objects.update_last_login(account, when=now)
        logger.info("Login succeeded", extra={"account_id": str(account.id)})
        return account

    @classmethod
    def _record_failed_attempt(cls, account: Account, now: datetime) -> None:
        config = get_auth_config()
        logger = cls.get_logger()

        Account.objects.filter(pk=account.pk).update(
            failed_login_count=F("failed_login_count") + 1
        )
        account.refresh_from_db(fields=["failed_login_count"])
        logger.warning(
            "Login failed: wrong password",
            extra={"account_id": str(account.id), "failed_attempts": account.failed_login_count},
        )

        if config.lockout_enabled and account.failed_login_count >= config.lockout_max_failed_attempts:
            account.lockout_until = now + config.lockout_duration
            account.failed_login_count = 0
            account.save(update_fields=["lockout_until", "failed_login_count", "updated_at"])
            logger.warning(
                "Account locked after repeated failures",
                extra={"account_id": str(account.id), "lockout_until": account.lockout_until},
            )

    @classmethod
    def login(cls, username, password) -> tuple[Account, IssuedToken]:
        """
        Validate credentials and issue a bearer token.

        Raises:
            AuthenticationError: "Invalid username or password" for every failure
        """
        account = cls.validate_credentials(username, password)
        if account is None:
            raise AuthenticationError(INVALID_CREDENTIALS)
        return account, TokenService.issue(account)

    @classmethod
    def get_profile(cls, account_id) -> Account:
        """
        Return the account named by a token's subject.

        Raises:
            NotFoundError: The account no longer exists
        """
        account = Account.objects.find_by_id(account_id)
        if account is None:
            cls.get_logger().info("Profile lookup miss", extra={"account_id": str(account_id)})
            raise NotFoundError(USER_NOT_FOUND, details={"account_id": str(account_id)})
        return account


# =============================================================================
# OAuth
# =============================================================================


def extract_identity(provider, extra_data, fallback_email=None) -> tuple[str, str]:
    """
    Read (email, display_name) from a provider's validated identity data.

    Google userinfo: `email`, `name`.
    Microsoft Graph /me: `mail` (or `userPrincipalName`), `displayName`.

    Raises:
        UpstreamAuthError: The assertion carries no email
    """
    extra_data = extra_data or {}
    if provider == "microsoft":
        email = extra_data.get("mail") or extra_data.get("userPrincipalName")
        name = extra_data.get("displayName")
    else:
        email = extra_data.get("email")
        name = extra_data.get("name")

    email = (email or fallback_email or "").strip().lower()
    if not email:
        label = PROVIDER_LABELS.get(provider, provider.title())
        raise UpstreamAuthError(f"No email returned from {label}")
    return email, (name or "").strip()


def is_email_verified(provider, extra_data, email, email_addresses=()) -> bool:
    """
    Whether the provider vouches for `email` belonging to the signed-in user.

    Google asserts it with the `email_verified` claim. Otherwise only the
    verified flag allauth records on the extracted EmailAddress objects
    counts. Microsoft Graph's `mail` / `userPrincipalName` are editable by
    any tenant admin and are never trusted on their own.
    """
    if provider == "google":
        claim = (extra_data or {}).get("email_verified")
        if claim is not None:
            return claim is True or str(claim).lower() == "true"

    for address in email_addresses or ():
        if (address.email or "").strip().lower() == email and address.verified:
            return True
    return False


def derive_username(display_name, email) -> str:
    """
    Build a username candidate from a display name, or the email local part.

    Spaces become underscores, other disallowed characters are dropped, short
    results are padded with underscores and long ones truncated.

    Example:
        >>> derive_username("Ada Lovelace", "ada@example.com")
        'Ada_Lovelace'
    """

    def clean(value):
        value = re.sub(r"\s+", "_", (value or "").strip())
        return re.sub(r"[^A-Za-z0-9_]", "", value)

    base = clean(display_name) or clean(email.split("@", 1)[0]) or "user"
    return base.ljust(USERNAME_MIN_LENGTH, "_")[:USERNAME_MAX_LENGTH]


class OAuthBridge(BaseService):
    """
    Map an external identity onto a local account.

    Usage:
        email, name = extract_identity("google", social_account.extra_data)
        account = OAuthBridge.resolve_account(email, name, email_verified=True)
        issued = OAuthBridge.complete(account)
        return redirect(OAuthBridge.frontend_redirect(token=issued.token))
    """

    MAX_USERNAME_ATTEMPTS = 100

    @classmethod
    def resolve_account(cls, email, display_name="", email_verified=False) -> Account:
        """
        Find the account with this email or auto-register one.

        An existing account is only returned when the provider verified the
        email. Auto-registered accounts have an unusable password, so they can
        only sign in through OAuth.

        Raises:
            UpstreamAuthError: No email, unverified email for an existing
                account, or the account could not be created
        """
        logger = cls.get_logger()
        if not email:
            raise UpstreamAuthError(OAUTH_FAILED)

        account = Account.objects.find_by_email(email)
        if account is not None:
            return cls._matched(account, email_verified)

        base = derive_username(display_name, email)
        for attempt in range(cls.MAX_USERNAME_ATTEMPTS):
            username = cls._candidate(base, attempt)
            if Account.objects.exists_username(username):
                continue
            try:
                with cls.atomic():
                    account = Account.objects.create_account(username, email, password=None)
            except IntegrityError:
                # Email registered concurrently: use it; otherwise retry the username
                account = Account.objects.find_by_email(email)
                if account is not None:
                    return cls._matched(account, email_verified)
                continue
            logger.info(
                "Account created from OAuth identity",
                extra={"account_id": str(account.id), "username": username},
            )
            return account

        logger.error("Could not allocate a username for OAuth account", extra={"base": base})
        raise UpstreamAuthError(OAUTH_CREATE_FAILED)

    @classmethod
    def _matched(cls, account, email_verified) -> Account:
        logger = cls.get_logger()
        if not email_verified:
            logger.warning(
                "OAuth identity with unverified email matched existing account",
                extra={"account_id": str(account.id)},
            )
            raise UpstreamAuthError(OAUTH_EMAIL_UNVERIFIED)
        logger.info("OAuth identity matched existing account", extra={"account_id": str(account.id)})
        return account

    @staticmethod
    def _candidate(base, attempt) -> str:
        if attempt == 0:
            return base
        suffix = str(attempt + 1)
        return f"{base[: USERNAME_MAX_LENGTH - len(suffix)]}{suffix}"

    @classmethod
    def complete(cls, account: Account) -> IssuedToken:
        """Issue the bearer token handed to the frontend."""
        return TokenService.issue(account)

    @staticmethod
    def frontend_redirect(token=None, error=None) -> str:
        """URL of the frontend OAuth landing page with ?token= or ?error=."""
        url = get_auth_config().oauth_success_url
        if token is not None:
            return append_query(url, token=token)
        return append_query(url, error=error or OAUTH_FAILED)

    @staticmethod
    def provider_disabled_message(provider) -> str:
        return OAUTH_PROVIDER_DISABLED.format(
            provider=PROVIDER_LABELS.get(provider, provider.title())
        )
