"""Page-window selection and navigation links for list endpoints.

``paginate`` is a pure function over an in-memory row collection: it selects
the rows of the requested page and derives ``first``/``last``/``next``/``prev``
links through a caller-supplied link builder. It never raises; a page outside
the collection yields an empty window with no ``next``/``prev`` links.

Raw query values are turned into a ``PageRequest`` by ``parse_page_request``,
which is where malformed input is rejected.
"""

import re
from dataclasses import dataclass
from typing import Final

from pydantic import BaseModel, ConfigDict

from api_skeleton.api.constants import PAGE_NUMBER_PARAM, PAGE_SIZE_PARAM
from api_skeleton.core.exceptions import ValidationError
from api_skeleton.core.types import LinkBuilder, Rows

DEFAULT_PAGE_SIZE: Final[int] = 10

_INTEGER_PATTERN: Final = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PageRequest:
    """A requested page. ``number`` is 1-indexed and may be out of range."""

    number: int
    size: int = DEFAULT_PAGE_SIZE


class PaginationLinks(BaseModel):
    """Navigation links of a paginated collection."""

    model_config = ConfigDict(frozen=True)

    first: str
    last: str
    next: str | None
    prev: str | None


@dataclass(frozen=True)
class PaginationResult[T]:
    """Rows of one page plus the links to navigate the collection."""

    paginated_rows: list[T]
    pagination_links: PaginationLinks


def _parse_integer(value: str | int, param: str) -> int:
    if isinstance(value, int):
        return value

    text = value.strip()
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValidationError(
            f"{param} must be an integer",
            context={"parameter": param, "value": value},
        )
    try:
        return int(text, 10)
    except ValueError as exc:
        # Past the interpreter's digit limit for int()
        raise ValidationError(
            f"{param} is too large",
            context={"parameter": param},
            cause=exc,
        ) from exc


def parse_page_request(
    number: str | int,
    size: str | int | None = None,
    default_size: int = DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """Build a ``PageRequest`` from raw ``page[number]`` / ``page[size]`` values.

    Page numbers below 1 are accepted and treated as out of bounds by
    ``paginate``; page sizes must be positive.

    Args:
        number: Raw page number.
        size: Raw page size, or None to use ``default_size``.
        default_size: Page size used when ``size`` is missing or blank.

    Returns:
        PageRequest: The parsed request.

    Raises:
        ValidationError: If a value is not a base-10 integer or the size is
            not positive.
    """
    page_number = _parse_integer(number, PAGE_NUMBER_PARAM)

    if size is None or (isinstance(size, str) and not size.strip()):
        page_size = default_size
    else:
        page_size = _parse_integer(size, PAGE_SIZE_PARAM)

    if page_size <= 0:
        raise ValidationError(
            f"{PAGE_SIZE_PARAM} must be a positive integer",
            context={"parameter": PAGE_SIZE_PARAM, "value": size},
        )

    return PageRequest(number=page_number, size=page_size)


def total_pages(row_count: int, page_size: int) -> int:
    """Number of pages needed for ``row_count`` rows (0 for no rows)."""
    if row_count == 0:
        return 0
    return -(-row_count // page_size)


def paginate[T](
    rows: Rows[T], page: PageRequest, link_for: LinkBuilder
) -> PaginationResult[T]:
    """Select the rows of ``page`` and build the navigation links.

    Args:
        rows: The full, ordered collection. It is only read.
        page: The requested page.
        link_for: Maps ``(page_number, page_size)`` to a URI.

    Returns:
        PaginationResult[T]: The page window and its links. ``last`` points at
            page 0 when the collection is empty.
    """
    number, size = page.number, page.size
    page_count = total_pages(len(rows), size)

    start = (number - 1) * size
    end = number * size
    # A negative start would index from the end of the sequence
    window = list(rows[start:end]) if start >= 0 else []

    is_out_of_bounds = number < 1 or number > page_count
    next_page = number + 1
    prev_page = number - 1

    links = PaginationLinks(
        first=link_for(1, size),
        last=link_for(page_count, size),
        next=(
            None
            if is_out_of_bounds or next_page > page_count
            else link_for(next_page, size)
        ),
        prev=None if is_out_of_bounds or prev_page < 1 else link_for(prev_page, size),
    )

    return PaginationResult(paginated_rows=window, pagination_links=links)
