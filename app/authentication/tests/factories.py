"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import AccountFactory

    # Account with the default password "TestPass123"
    account = AccountFactory()

    # Account with a specific password
    account = AccountFactory(password="Passw0rd")

    # OAuth-style account (unusable password)
    account = AccountFactory(password=None)
"""

import factory

from authentication.models import Account

DEFAULT_PASSWORD = "TestPass123"


class AccountFactory(factory.django.DjangoModelFactory):
    """
    Factory for Account model.

    Goes through AccountManager.create_account so the password is hashed
    the same way registration hashes it.
    """

    class Meta:
        model = Account
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use AccountManager.create_account()."""
        password = kwargs.pop("password", DEFAULT_PASSWORD)
        return model_class.objects.create_account(
            kwargs.pop("username"), kwargs.pop("email"), password, **kwargs
        )
