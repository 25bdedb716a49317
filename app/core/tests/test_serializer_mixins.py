"""Tests for CamelCaseFieldsMixin."""

import pytest
from rest_framework import serializers

from core.serializer_mixins import CamelCaseFieldsMixin, to_camel_case


@pytest.mark.parametrize(
    "name,expected",
    [
        ("id", "id"),
        ("created_at", "createdAt"),
        ("last_login_at", "lastLoginAt"),
        ("confirm_password", "confirmPassword"),
    ],
)
def test_to_camel_case(name, expected):
    assert to_camel_case(name) == expected


class SampleSerializer(CamelCaseFieldsMixin, serializers.Serializer):
    display_name = serializers.CharField()
    age = serializers.IntegerField()


def test_input_accepted_in_camel_case():
    serializer = SampleSerializer(data={"displayName": "Ada", "age": 36})

    assert serializer.is_valid(), serializer.errors
    assert serializer.validated_data == {"display_name": "Ada", "age": 36}


def test_errors_reported_under_camel_case_names():
    serializer = SampleSerializer(data={"age": 36})

    assert not serializer.is_valid()
    assert set(serializer.errors) == {"displayName"}


def test_output_rendered_in_camel_case():
    data = SampleSerializer({"display_name": "Ada", "age": 36}).data

    assert data == {"displayName": "Ada", "age": 36}
