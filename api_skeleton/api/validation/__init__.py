"""Outgoing response validation.

- **response_validator**: the per-response send decision (strict or lenient)
- **route**: ``ValidatedRoute``, the FastAPI route class applying it
"""

from api_skeleton.api.validation.response_validator import (
    Replace,
    ResponseContext,
    ResponseValidator,
    Send,
    ValidationOutcome,
)
from api_skeleton.api.validation.route import ValidatedRoute

__all__ = [
    "Replace",
    "ResponseContext",
    "ResponseValidator",
    "Send",
    "ValidatedRoute",
    "ValidationOutcome",
]
