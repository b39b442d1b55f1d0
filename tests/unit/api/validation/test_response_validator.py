"""Unit tests for ResponseValidator."""

from collections.abc import Callable
from typing import Any

import pytest
from pydantic import BaseModel, TypeAdapter, field_validator
from pytest_mock import MockerFixture

from api_skeleton.api.validation import (
    Replace,
    ResponseContext,
    ResponseValidator,
    Send,
)
from api_skeleton.core.exceptions import ErrorCode


class Pet(BaseModel):
    """Schema used by the tests."""

    id: str
    name: str


class Positive(BaseModel):
    """Schema whose validator raises a plain ValueError."""

    value: int

    @field_validator("value")
    @classmethod
    def must_be_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value


PET_SCHEMA = TypeAdapter(Pet)


def context_for(body: Any, status_code: int = 200) -> ResponseContext:
    return ResponseContext(status_code=status_code, body=body, schema=PET_SCHEMA)


@pytest.mark.unit
class TestValidate:
    """Tests for ResponseValidator.validate."""

    def test_valid_body(self) -> None:
        """A matching body is valid and carries no errors."""
        outcome = ResponseValidator().validate(context_for({"id": "1", "name": "Rex"}))

        assert outcome.is_valid
        assert outcome.errors is None
        assert outcome.message is None

    def test_no_schema(self) -> None:
        """Without a declared schema nothing is checked."""
        context = ResponseContext(status_code=201, body={"anything": True})

        assert ResponseValidator().validate(context).is_valid

    def test_invalid_body(self) -> None:
        """The message names the status code and lists the errors."""
        outcome = ResponseValidator().validate(context_for({"id": "1"}, 200))

        assert not outcome.is_valid
        assert outcome.errors is not None
        assert outcome.errors[0]["loc"] == ["name"]
        assert outcome.errors[0]["type"] == "missing"
        assert outcome.message is not None
        assert outcome.message.startswith("Invalid response for status code 200: ")
        assert '"name"' in outcome.message

    def test_custom_validator_errors(self) -> None:
        """Exceptions raised by validators are rendered as their message."""
        context = ResponseContext(
            status_code=200, body={"value": -1}, schema=TypeAdapter(Positive)
        )

        outcome = ResponseValidator().validate(context)

        assert not outcome.is_valid
        assert outcome.errors is not None
        assert outcome.errors[0]["type"] == "value_error"
        assert outcome.errors[0]["ctx"] == {"error": "must be positive"}
        assert outcome.message is not None
        assert "must be positive" in outcome.message


@pytest.mark.unit
class TestBeforeSendLenient:
    """Lenient mode only reports failures."""

    def test_valid_body_is_sent(self, warnings_in: Callable[[], list[str]]) -> None:
        """No marker, no warning."""
        body = {"id": "1", "name": "Rex"}
        context = context_for(body)

        action = ResponseValidator().before_send(context)

        assert action == Send(body)
        assert not context.validation_failed
        assert warnings_in() == []

    def test_invalid_body_is_sent_with_warning(
        self, warnings_in: Callable[[], list[str]]
    ) -> None:
        """The original body goes out, the context is marked, one warning."""
        body = {"id": "1", "name": None}
        context = context_for(body, 200)

        action = ResponseValidator(strict=False).before_send(context)

        assert action == Send(body)
        assert context.validation_failed
        assert context.validation_error_for == 200
        warnings = warnings_in()
        assert len(warnings) == 1
        assert warnings[0].startswith("Invalid response for status code 200")

    def test_custom_validator_failure_is_sent(
        self, warnings_in: Callable[[], list[str]]
    ) -> None:
        """A failing field validator is reported like any other mismatch."""
        body = {"value": -1}
        context = ResponseContext(
            status_code=200, body=body, schema=TypeAdapter(Positive)
        )

        action = ResponseValidator().before_send(context)

        assert action == Send(body)
        assert len(warnings_in()) == 1

    def test_warning_binds_status_code(
        self, captured_logs: list[dict[str, Any]]
    ) -> None:
        """The failing status code is attached to the log record."""
        ResponseValidator().before_send(context_for({}, 200))

        record = next(r for r in captured_logs if r["level"].name == "WARNING")
        assert record["extra"]["validation_error_for"] == 200
        assert record["extra"]["strict"] is False


@pytest.mark.unit
class TestBeforeSendStrict:
    """Strict mode replaces invalid bodies."""

    def test_valid_body_is_sent(self) -> None:
        """Valid responses are untouched in strict mode too."""
        body = {"id": "1", "name": "Rex"}

        assert ResponseValidator(strict=True).before_send(context_for(body)) == Send(
            body
        )

    def test_invalid_body_is_replaced(
        self, warnings_in: Callable[[], list[str]]
    ) -> None:
        """The replacement is a 500 that references the failing status code."""
        context = context_for({"id": 1}, 200)

        action = ResponseValidator(strict=True).before_send(context)

        assert isinstance(action, Replace)
        assert action.status_code == 500
        assert action.error_code == ErrorCode.RESPONSE_VALIDATION_ERROR.value
        assert action.message.startswith("Invalid response for status code 200")
        assert action.details["validation_error_for"] == 200
        assert {tuple(e["loc"]) for e in action.details["errors"]} == {
            ("id",),
            ("name",),
        }
        assert context.validation_failed
        assert len(warnings_in()) == 1

    def test_custom_error_status_code(self) -> None:
        """The replacement status code is configurable."""
        validator = ResponseValidator(strict=True, error_status_code=502)

        action = validator.before_send(context_for({}, 200))

        assert isinstance(action, Replace)
        assert action.status_code == 502


@pytest.mark.unit
class TestBeforeSendMarker:
    """A marked response is never validated again."""

    @pytest.mark.parametrize("strict", [True, False])
    def test_marked_context_skips_validation(
        self,
        mocker: MockerFixture,
        warnings_in: Callable[[], list[str]],
        strict: bool,
    ) -> None:
        """The schema is not consulted and the body is sent as is."""
        schema = mocker.Mock(spec=TypeAdapter)
        body = {"error_code": "RESPONSE_VALIDATION_ERROR"}
        context = ResponseContext(
            status_code=500, body=body, schema=schema, validation_failed=True
        )

        action = ResponseValidator(strict=strict).before_send(context)

        assert action == Send(body)
        schema.validate_python.assert_not_called()
        assert warnings_in() == []

    def test_second_call_after_failure_sends(self) -> None:
        """Once marked, a failing body passes through even in strict mode."""
        validator = ResponseValidator(strict=True)
        context = context_for({}, 200)

        first = validator.before_send(context)
        second = validator.before_send(context)

        assert isinstance(first, Replace)
        assert second == Send({})
