"""Tests for core infrastructure: exceptions, exception handler, helpers, health check."""
