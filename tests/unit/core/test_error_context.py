"""Unit tests for sensitive value redaction."""

import pytest

from api_skeleton.core.error_context import (
    MAX_DEPTH,
    REDACTED,
    is_sensitive_field,
    sanitize_dict,
    sanitize_error_context,
    sanitize_value,
)


@pytest.mark.unit
class TestIsSensitiveField:
    """Tests for is_sensitive_field."""

    @pytest.mark.parametrize(
        "field_name",
        ["password", "DB_PASSWORD", "api_key", "apiKey", "Authorization", "token"],
    )
    def test_sensitive(self, field_name: str) -> None:
        assert is_sensitive_field(field_name)

    @pytest.mark.parametrize("field_name", ["username", "species", "page", "id"])
    def test_not_sensitive(self, field_name: str) -> None:
        assert not is_sensitive_field(field_name)

    def test_configured_fields(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Names from LOG_CONFIG__SENSITIVE_FIELDS are redacted too."""
        monkeypatch.setenv("LOG_CONFIG__SENSITIVE_FIELDS", '["owner"]')

        assert is_sensitive_field("owner_name")


@pytest.mark.unit
class TestSanitize:
    """Tests for the sanitize helpers."""

    def test_nested_structures(self) -> None:
        data = {
            "user": {"name": "alice", "password": "hunter2"},
            "items": [{"token": "t"}, {"id": 1}],
            "pair": ({"secret": "s"}, "plain"),
        }

        assert sanitize_dict(data) == {
            "user": {"name": "alice", "password": REDACTED},
            "items": [{"token": REDACTED}, {"id": 1}],
            "pair": ({"secret": REDACTED}, "plain"),
        }

    def test_original_untouched(self) -> None:
        data = {"password": "hunter2"}

        sanitize_dict(data)

        assert data == {"password": "hunter2"}

    def test_depth_limit(self) -> None:
        """Structures nested deeper than MAX_DEPTH are cut off."""
        value: object = "leaf"
        for _ in range(MAX_DEPTH + 2):
            value = [value]

        result = sanitize_value(value)  # type: ignore[arg-type]
        for _ in range(MAX_DEPTH + 1):
            assert isinstance(result, list)
            result = result[0]

        assert result == REDACTED

    def test_error_context(self) -> None:
        context = sanitize_error_context(
            ValueError("boom"), {"path": "/pets", "authorization": "Basic xyz"}
        )

        assert context == {
            "error_type": "ValueError",
            "error_message": "boom",
            "path": "/pets",
            "authorization": REDACTED,
        }
