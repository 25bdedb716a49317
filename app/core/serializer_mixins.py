"""
Serializer mixins providing reusable functionality for DRF serializers.

Available Mixins:
    CamelCaseFieldsMixin: Expose snake_case fields under camelCase names

Usage:
    from core.serializer_mixins import CamelCaseFieldsMixin

    class AccountSerializer(CamelCaseFieldsMixin, serializers.ModelSerializer):
        class Meta:
            model = Account
            fields = ["id", "created_at"]  # rendered as "id", "createdAt"
"""

from __future__ import annotations

import re

_SNAKE_SEGMENT = re.compile(r"_([a-z0-9])")


def to_camel_case(name: str) -> str:
    """
    Convert a snake_case name to camelCase.

    Example:
        >>> to_camel_case("last_login_at")
        'lastLoginAt'
    """
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), name)


class CamelCaseFieldsMixin:
    """
    Rename serializer fields to camelCase on the wire.

    Works for input and output: the renamed field keeps the snake_case
    attribute as its source, so validated_data and instances still use
    Python names.
    """

    def get_fields(self):
        fields = super().get_fields()  # type: ignore[misc]
        renamed = {}
        for name, field in fields.items():
            camel = to_camel_case(name)
            if camel != name and field.source is None:
                field.source = name
            renamed[camel] = field
        return renamed
