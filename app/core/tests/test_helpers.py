"""Tests for core.helpers."""

import uuid

import pytest

from core.helpers import append_query, validate_uuid


class TestValidateUuid:
    @pytest.mark.parametrize(
        "value",
        [uuid.uuid4(), "550e8400-e29b-41d4-a716-446655440000"],
    )
    def test_valid(self, value):
        assert validate_uuid(value) is True

    @pytest.mark.parametrize("value", ["", "not-a-uuid", None, 42])
    def test_invalid(self, value):
        assert validate_uuid(value) is False


class TestAppendQuery:
    def test_encodes_values(self):
        url = append_query("http://localhost:5174/oauth-success", error="No email returned")

        assert url == "http://localhost:5174/oauth-success?error=No+email+returned"

    def test_skips_none(self):
        url = append_query("http://localhost:5174/oauth-success", token=None)

        assert url == "http://localhost:5174/oauth-success"

    def test_keeps_existing_query(self):
        url = append_query("http://example.com/cb?lang=en", token="abc")

        assert url == "http://example.com/cb?lang=en&token=abc"
