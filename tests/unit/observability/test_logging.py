"""Unit tests for the request-scoped logging context."""

from __future__ import annotations

import pytest

from recipe_manager.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    unbind_context,
)


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_context():
    clear_context()
    yield
    clear_context()


class TestLoggingContext:
    """Tests for bind/unbind/clear helpers."""

    def test_bind_accumulates_fields(self):
        """Should merge new fields into the existing context."""
        bind_context(request_id="abc")
        bind_context(user_id="42")

        assert get_context() == {"request_id": "abc", "user_id": "42"}

    def test_unbind_removes_fields(self):
        """Should drop only the named keys."""
        bind_context(request_id="abc", user_id="42")

        unbind_context("user_id", "missing")

        assert get_context() == {"request_id": "abc"}

    def test_get_context_returns_copy(self):
        """Should not let callers mutate the stored context."""
        bind_context(request_id="abc")

        get_context()["request_id"] = "changed"

        assert get_context() == {"request_id": "abc"}

    def test_clear(self):
        """Should empty the context."""
        bind_context(request_id="abc")

        clear_context()

        assert get_context() == {}
