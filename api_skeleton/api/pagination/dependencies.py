"""FastAPI dependencies exposing pagination to route handlers."""

from typing import Annotated

from fastapi import Query, Request

from api_skeleton.api.constants import PAGE_NUMBER_PARAM, PAGE_SIZE_PARAM
from api_skeleton.api.pagination.links import PageLinkBuilder
from api_skeleton.api.pagination.paginator import PageRequest, parse_page_request
from api_skeleton.core.config import Settings


def get_page_request(
    request: Request,
    page_number: Annotated[
        str,
        Query(
            alias=PAGE_NUMBER_PARAM,
            description="1-indexed page number",
            examples=["1"],
        ),
    ],
    page_size: Annotated[
        str | None,
        Query(
            alias=PAGE_SIZE_PARAM,
            description="Number of rows per page",
            examples=["10"],
        ),
    ] = None,
) -> PageRequest:
    """Parse the bracketed pagination query parameters.

    Values arrive as raw strings so malformed input is reported as a 400
    ``VALIDATION_ERROR`` by ``parse_page_request``.
    """
    settings: Settings = request.app.state.settings
    return parse_page_request(
        page_number,
        page_size,
        default_size=settings.pagination_config.default_page_size,
    )


def get_link_builder(request: Request) -> PageLinkBuilder:
    """Link builder bound to the current request URL."""
    settings: Settings = request.app.state.settings
    return PageLinkBuilder(request.url, base_url=settings.api_base_url)
