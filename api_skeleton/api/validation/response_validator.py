"""Validation of outgoing response bodies against their declared schemas.

``ResponseValidator.before_send`` decides, for one response, between sending
the body unchanged and replacing it with an error:

- the response already carries the validation marker: send, nothing checked
- no schema is declared for the status code, or the body matches: send
- the body does not match and validation is lenient: mark, warn, send
- the body does not match and validation is strict: mark, warn, replace

The marker lives on the ``ResponseContext`` and guarantees an error response
produced because of a validation failure is never validated itself.
"""

from dataclasses import dataclass, field
from typing import Any

import orjson
from loguru import logger
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from api_skeleton.core.exceptions import ErrorCode, ResponseSerializationError
from api_skeleton.core.types import JsonValue


@dataclass
class ResponseContext:
    """State of one outgoing response while it is being checked.

    Attributes:
        status_code: Status code about to be sent.
        body: Decoded JSON body about to be sent.
        schema: Declared schema for ``status_code``, if any.
        validation_failed: Marker set once a validation failure was reported.
        validation_error_for: Status code of the response that failed.
    """

    status_code: int
    body: JsonValue
    schema: TypeAdapter[Any] | None = None
    validation_failed: bool = False
    validation_error_for: int | None = None

    def mark_failed(self) -> None:
        """Set the validation marker for this response."""
        self.validation_failed = True
        self.validation_error_for = self.status_code


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of checking one body against its schema."""

    is_valid: bool
    errors: list[dict[str, Any]] | None = None
    message: str | None = None


@dataclass(frozen=True)
class Send:
    """Send ``body`` as is."""

    body: JsonValue


@dataclass(frozen=True)
class Replace:
    """Discard the original body and send this error instead."""

    status_code: int
    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


type SendAction = Send | Replace


class ResponseValidator:
    """Checks outgoing bodies and chooses the send action.

    Args:
        strict: Replace invalid responses with an error instead of only
            logging a warning.
        error_status_code: Status code of the replacement error response.
    """

    def __init__(self, *, strict: bool = False, error_status_code: int = 500) -> None:
        self.strict = strict
        self.error_status_code = error_status_code

    def validate(self, context: ResponseContext) -> ValidationOutcome:
        """Validate the body of ``context`` against its schema.

        Args:
            context: The response being checked.

        Returns:
            ValidationOutcome: ``is_valid`` with the pydantic errors and a
                message when invalid.

        Raises:
            ResponseSerializationError: If the validation errors cannot be
                serialized.
        """
        if context.schema is None:
            return ValidationOutcome(is_valid=True)

        try:
            context.schema.validate_python(context.body)
        except PydanticValidationError as exc:
            validation_error = exc
        else:
            return ValidationOutcome(is_valid=True)

        # pydantic renders exceptions held in the error context as strings
        try:
            rendered = validation_error.json(include_url=False, indent=2)
        except ValueError as exc:
            raise ResponseSerializationError(
                "Response validation errors could not be serialized",
                context={"status_code": context.status_code},
                cause=exc,
            ) from exc

        message = f"Invalid response for status code {context.status_code}: {rendered}"
        return ValidationOutcome(
            is_valid=False, errors=orjson.loads(rendered), message=message
        )

    def before_send(self, context: ResponseContext) -> SendAction:
        """Decide how the response described by ``context`` is sent.

        Args:
            context: The response about to be sent. Its marker is set when
                validation fails.

        Returns:
            SendAction: ``Send`` with the original body or ``Replace`` with
                the error to send instead.

        Raises:
            ResponseSerializationError: If the validation errors cannot be
                serialized.
        """
        if context.validation_failed:
            return Send(context.body)

        outcome = self.validate(context)
        if outcome.is_valid:
            return Send(context.body)

        context.mark_failed()
        # The message embeds JSON, so it is passed as an argument, not a format
        logger.bind(
            validation_error_for=context.status_code,
            strict=self.strict,
        ).warning("{}", outcome.message)

        if not self.strict:
            return Send(context.body)

        return Replace(
            status_code=self.error_status_code,
            error_code=ErrorCode.RESPONSE_VALIDATION_ERROR.value,
            message=outcome.message or "Invalid response",
            details={
                "validation_error_for": context.status_code,
                "errors": outcome.errors,
            },
        )
