"""
Model mixins providing reusable functionality for Django models.

Available Mixins:
    UUIDPrimaryKeyMixin: Use a random UUID as primary key

Note:
    Mixins are abstract and don't create database tables.
"""

from __future__ import annotations

import uuid

from django.db import models


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    IDs are opaque to API clients: they are non-guessable and do not
    reveal how many records exist.

    Fields:
        id: UUIDField as primary key (uuid4, generated in Python)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True
