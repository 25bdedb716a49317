# Generated manually - Initial Account table

import uuid

import django.core.validators
import django.db.models.functions.text
from django.db import migrations, models

import authentication.managers


class Migration(migrations.Migration):
    """
    Create the Account table.

    Username and email uniqueness is case-insensitive: both are enforced by
    unique indexes on LOWER(column) rather than plain unique columns.
    """

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                (
                    "password",
                    models.CharField(max_length=128, verbose_name="password"),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        help_text="Login name, 3-50 characters: letters, numbers and underscores",
                        max_length=50,
                        validators=[
                            django.core.validators.MinLengthValidator(3),
                            django.core.validators.RegexValidator(
                                code="invalid_username",
                                message="Username can only contain letters, numbers, and underscores.",
                                regex="^[a-zA-Z0-9_]+$",
                            ),
                        ],
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        help_text="Contact email, also used to match OAuth identities",
                        max_length=100,
                    ),
                ),
                (
                    "last_login_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the account last passed a credential check",
                        null=True,
                    ),
                ),
                (
                    "failed_login_count",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Consecutive failed password attempts",
                    ),
                ),
                (
                    "lockout_until",
                    models.DateTimeField(
                        blank=True,
                        help_text="Password logins are refused until this time",
                        null=True,
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Whether this account may log in. Deselect instead of deleting.",
                    ),
                ),
            ],
            options={
                "verbose_name": "account",
                "verbose_name_plural": "accounts",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("username"),
                        name="account_username_ci_unique",
                        violation_error_message="Username already exists",
                    ),
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("email"),
                        name="account_email_ci_unique",
                        violation_error_message="Email already exists",
                    ),
                ],
            },
            managers=[
                ("objects", authentication.managers.AccountManager()),
            ],
        ),
    ]
