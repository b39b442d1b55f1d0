"""Pagination of in-memory collections for list endpoints.

- **paginator**: page parsing, page-window selection and link derivation
- **links**: page URIs built from the current request URL
- **dependencies**: FastAPI dependencies for route handlers
"""

from api_skeleton.api.pagination.links import PageLinkBuilder
from api_skeleton.api.pagination.paginator import (
    DEFAULT_PAGE_SIZE,
    PageRequest,
    PaginationLinks,
    PaginationResult,
    paginate,
    parse_page_request,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "PageLinkBuilder",
    "PageRequest",
    "PaginationLinks",
    "PaginationResult",
    "paginate",
    "parse_page_request",
]
