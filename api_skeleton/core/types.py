"""Type aliases for dynamic data structures used across the application."""

from collections.abc import Callable, Sequence
from typing import Any

# Any value that survives a JSON round trip
type JsonValue = (
    dict[str, "JsonValue"] | list["JsonValue"] | str | int | float | bool | None
)

# Context dictionary for error details and debugging information
type ErrorContext = dict[str, Any]

# Maps (page number, page size) to the URI of that page
type LinkBuilder = Callable[[int, int], str]

# Read-only collection of records handed to the paginator
type Rows[T] = Sequence[T]
